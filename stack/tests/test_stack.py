from unittest.mock import patch

import pytest
from aws_cdk import App
from aws_cdk.assertions import Template
from botocore.exceptions import ClientError

STATE_MACHINE = "arn:aws:states:us-east-1:123456789012:stateMachine:train"


@pytest.fixture(autouse=True)
def env_setup(monkeypatch):
    monkeypatch.setenv("MLOPS_TRAIN_STATE_MACHINE_ARN", STATE_MACHINE)
    monkeypatch.setenv("MLOPS_S3_PREFIX", "")


@pytest.fixture(autouse=True)
def missing_bucket():
    with patch("mlopsconstructs.s3.boto3.client") as client:
        client.return_value.head_bucket.side_effect = ClientError(
            {"Error": {"Code": "404", "Message": "Not Found"}}, "HeadBucket"
        )
        yield client


def test_stack():
    from stack import MlopsStack

    stack = MlopsStack(App(), "MlopsTest", s3_prefix="train/")
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::S3::Bucket", {"BucketName": "mlopstest-resource-bucket"}
    )
    template.has_resource_properties(
        "AWS::Lambda::Function",
        {
            "FunctionName": "AutoML-TS-MLOps-Pipeline-Upload-Lambda",
            "Environment": {"Variables": {"STEP_FUNCTIONS_ARN": STATE_MACHINE}},
        },
    )
    template.resource_count_is("AWS::CloudWatch::Alarm", 4)
    outputs = template.find_outputs("*")
    assert any(key.startswith("triggerfunction") for key in outputs)
    assert any(key.startswith("triggerrole") for key in outputs)


def test_stack_defaults_from_env():
    from stack import S3_PREFIX, S3_SUFFIX, TRAIN_STATE_MACHINE_ARN

    assert TRAIN_STATE_MACHINE_ARN == STATE_MACHINE
    assert S3_PREFIX == "train/"
    assert S3_SUFFIX == ".csv"


def test_stack_without_cloud_watch():
    from stack import MlopsStack

    stack = MlopsStack(
        App(),
        "MlopsTest",
        resource_bucket="custom-resources",
        name_prefix="Demo",
        use_cloud_watch=False,
    )
    template = Template.from_stack(stack)

    template.resource_count_is("AWS::CloudWatch::Alarm", 0)
    template.has_resource_properties(
        "AWS::S3::Bucket", {"BucketName": "custom-resources"}
    )
    template.has_resource_properties(
        "AWS::IAM::Role", {"RoleName": "Demo-Train-Trigger-Role"}
    )
