"""Static attribute tables for each record kind tfctl can query.

These drive ``--schema`` output and the per-command default ``--attrs``.
Root fields are addressed with a leading ``.``; everything else lives under
the record's ``attributes`` object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, TextIO, Tuple

SCHEMA_HELP = """\
Resource level attributes that are directly available to the --attrs flag.
For a complete schema, including relationships, use --output=raw and see the
attrs help in the documentation."""


@dataclass(frozen=True)
class RecordKind:
    """Shape of one queryable record type."""

    name: str
    command: str
    defaults: Tuple[str, ...]
    attributes: Tuple[str, ...]
    root: Tuple[str, ...] = ("id", "type")
    parent: str = "data"
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    def fields(self) -> List[str]:
        """Root fields (dotted) first, then attributes, each group sorted."""
        return sorted(f".{name}" for name in self.root) + sorted(self.attributes)


ORGANIZATION = RecordKind(
    name="organization",
    command="oq",
    defaults=("external-id:id", ".id:name"),
    attributes=(
        "allow-force-delete-workspaces",
        "assessments-enforced",
        "collaborator-auth-policy",
        "cost-estimation-enabled",
        "created-at",
        "default-execution-mode",
        "email",
        "external-id",
        "name",
        "owners-team-saml-role-id",
        "saml-enabled",
        "session-remember",
        "session-timeout",
        "trial-expires-at",
        "two-factor-conformant",
    ),
    aliases=("org",),
)

PROJECT = RecordKind(
    name="project",
    command="pq",
    defaults=(".id", "name"),
    attributes=("created-at", "description", "name", "workspace-count"),
)

MODULE = RecordKind(
    name="module",
    command="mq",
    defaults=(".id", "name"),
    attributes=(
        "created-at",
        "name",
        "namespace",
        "no-code",
        "provider",
        "registry-name",
        "status",
        "updated-at",
        "version-statuses",
    ),
)

RUN = RecordKind(
    name="run",
    command="rq",
    defaults=(".id", "created-at", "status"),
    attributes=(
        "auto-apply",
        "created-at",
        "has-changes",
        "is-destroy",
        "message",
        "plan-only",
        "position-in-queue",
        "refresh",
        "refresh-only",
        "source",
        "status",
        "status-timestamps",
        "target-addrs",
        "terraform-version",
        "trigger-reason",
    ),
)

STATE_VERSION = RecordKind(
    name="state-version",
    command="svq",
    defaults=(".id", "serial", "created-at"),
    attributes=(
        "created-at",
        "download-url",
        "resources-processed",
        "serial",
        "size",
        "state-version",
        "status",
        "terraform-version",
    ),
    aliases=("sv",),
)

WORKSPACE = RecordKind(
    name="workspace",
    command="wq",
    defaults=(".id", "name"),
    attributes=(
        "allow-destroy-plan",
        "apply-duration-average",
        "auto-apply",
        "created-at",
        "description",
        "environment",
        "execution-mode",
        "file-triggers-enabled",
        "global-remote-state",
        "latest-change-at",
        "locked",
        "name",
        "plan-duration-average",
        "queue-all-runs",
        "resource-count",
        "source",
        "speculative-enabled",
        "tag-names",
        "terraform-version",
        "trigger-prefixes",
        "updated-at",
        "vcs-repo",
        "working-directory",
    ),
    aliases=("ws",),
)

RESOURCE = RecordKind(
    name="resource",
    command="sq",
    defaults=("!.mode", "!.type", ".resource", "id", "name"),
    root=(
        "create_before_destroy",
        "dependencies",
        "index_key",
        "mode",
        "module",
        "name",
        "provider",
        "resource",
        "schema_version",
        "sensitive_attributes",
        "type",
    ),
    attributes=("arn", "id", "name", "tags"),
    parent="",
)

KINDS: Dict[str, RecordKind] = {
    kind.name: kind
    for kind in (ORGANIZATION, PROJECT, MODULE, RUN, STATE_VERSION, WORKSPACE, RESOURCE)
}


def lookup(name: str) -> RecordKind:
    """Find a kind by name, alias or command name.

    Raises:
        KeyError: no kind matches ``name``.
    """
    for kind in KINDS.values():
        if name in (kind.name, kind.command) or name in kind.aliases:
            return kind
    raise KeyError(name)


def kind_names() -> List[str]:
    return sorted(KINDS)


def dump_schema(kind: RecordKind, sink: TextIO) -> None:
    """Print the sorted attribute names of ``kind`` and a short help note."""
    for name in kind.fields():
        sink.write(name + "\n")
    sink.write("\n")
    sink.write(SCHEMA_HELP + "\n")


__all__ = [
    "KINDS",
    "RecordKind",
    "SCHEMA_HELP",
    "dump_schema",
    "kind_names",
    "lookup",
]
