"""S3 helpers for archiving run reports."""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import boto3

from common.serialization import serialize_dataclass

logger = logging.getLogger(__name__)


def get_s3_client():
    """Create S3 client."""
    return boto3.client("s3")


def build_s3_key(prefix: str, timestamp: datetime, filename: str) -> str:
    """Build a partitioned S3 key path."""
    return (
        f"{prefix}/"
        f"year={timestamp.year:04d}/"
        f"month={timestamp.month:02d}/"
        f"day={timestamp.day:02d}/"
        f"{filename}"
    )


def upload_jsonl_to_s3(
    records: Iterable[Mapping[str, Any]],
    bucket: str,
    key: str,
) -> None:
    """Upload in-memory records to S3 as JSONL."""
    body = "\n".join(json.dumps(record, default=str, ensure_ascii=False) for record in records) + "\n"

    s3 = get_s3_client()
    s3.put_object(
        Bucket=bucket,
        Key=key,
        Body=body.encode("utf-8"),
        ContentType="application/jsonl",
    )


def upload_jsonl_records_to_s3(records: list[Any], prefix: str) -> str:
    """
    Upload a list of dataclass or dict records to S3 as JSONL.

    Handles serialization, builds the S3 key, and logs the result.

    Args:
        records: List of dataclass objects to upload
        prefix: S3 prefix (e.g., "sync_runs")

    Returns:
        The S3 key that was written
    """
    bucket = os.environ["S3_BUCKET_NAME"]
    now = datetime.now(timezone.utc)
    filename = f"{prefix}_{now.strftime('%Y_%m_%d_%H_%M')}.jsonl"
    key = build_s3_key(prefix, now, filename)

    serialized = [
        record if isinstance(record, dict) else serialize_dataclass(record)
        for record in records
    ]
    upload_jsonl_to_s3(serialized, bucket, key)

    logger.info("Uploaded %d records to s3://%s/%s", len(records), bucket, key)
    return key
