"""Tests for Hungarian notation detection."""

import pytest

from tfctl.hungarian import is_hungarian


@pytest.mark.parametrize(
    "type_,name",
    [
        ("aws_s3_bucket", "logs_bucket"),
        ("aws_s3_bucket", "logs-bucket"),
        ("aws_s3_bucket", "mybucket"),
        ("aws_instance", "Web-Instance"),
        ("google_compute_instance", "compute"),
    ],
)
def test_hungarian_names(type_, name):
    assert is_hungarian(type_, name)


@pytest.mark.parametrize(
    "type_,name",
    [
        ("aws_instance", "web"),
        ("aws_vpc", "main"),
        ("aws_caller_identity", "current"),
        ("", "bucket"),
        ("aws_s3_bucket", ""),
    ],
)
def test_non_hungarian_names(type_, name):
    assert not is_hungarian(type_, name)
