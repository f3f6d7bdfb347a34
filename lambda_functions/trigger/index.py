import hashlib
import json
import os
import re
from pathlib import Path
from random import randint
from typing import Dict
from urllib.parse import unquote_plus

import boto3
from botocore.exceptions import ClientError

# Step Functions execution names are limited to 80 characters.
MAX_NAME_LENGTH = 80
MAX_SEQUENCER_LENGTH = 32
KEY_HASH_LENGTH = 8
INVALID_NAME_CHARS = re.compile(r"[^0-9A-Za-z_-]")


def execution_name(key: str, sequencer: str = None) -> str:
    """Derive a stable execution name from an object key and its sequencer.

    The name is ``<key stem>-<key hash>-<sequencer>``: the hash of the full
    key keeps objects with the same stem in different prefixes apart, and
    the stem is truncated so the name fits in ``MAX_NAME_LENGTH``.
    """
    suffix = INVALID_NAME_CHARS.sub("-", sequencer or str(randint(100, 999)))
    key_hash = hashlib.sha1(key.encode("utf8")).hexdigest()[:KEY_HASH_LENGTH]
    tail = f"{key_hash}-{suffix[-MAX_SEQUENCER_LENGTH:]}"
    keyroot = INVALID_NAME_CHARS.sub("-", Path(key).stem) or "object"
    keyroot = keyroot[: MAX_NAME_LENGTH - len(tail) - 1]
    return f"{keyroot}-{tail}"


def handler(event: Dict, context: Dict):
    state_machine = os.getenv("STEP_FUNCTIONS_ARN")
    step_functions = boto3.client("stepfunctions")
    executions = []
    for record in event.get("Records", []):
        try:
            bucket = record["s3"]["bucket"]["name"]
            s3_object = record["s3"]["object"]
            key = unquote_plus(s3_object["key"])
        except KeyError:
            print("Message body does not contain key")
            continue

        name = execution_name(key, s3_object.get("sequencer"))
        execution_input = {
            "bucket": bucket,
            "key": key,
            "size": s3_object.get("size"),
            "eventTime": record.get("eventTime"),
        }
        try:
            response = step_functions.start_execution(
                stateMachineArn=state_machine,
                name=name,
                input=json.dumps(execution_input),
            )
        except ClientError as ce:
            if ce.response["Error"]["Code"] != "ExecutionAlreadyExists":
                raise
            print(f"Execution {name} already started for s3://{bucket}/{key}")
            continue

        print(f"Started {response['executionArn']} for s3://{bucket}/{key}")
        executions.append(response["executionArn"])

    return {"executions": executions}
