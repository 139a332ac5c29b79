from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config

from ..settings import settings


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # Single attempt: a failed secret read fails the invocation.
    return Config(
        retries={"max_attempts": 1, "mode": "standard"},
        connect_timeout=2,
        read_timeout=5,
    )


@lru_cache(maxsize=1)
def secretsmanager_client():
    return boto3.client("secretsmanager", region_name=settings.aws_region, config=botocore_config())
