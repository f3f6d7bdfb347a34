from typing import List

from aws_cdk import (
    aws_iam,
    aws_lambda,
    aws_lambda_event_sources,
    aws_s3,
    aws_stepfunctions,
    aws_stepfunctions_tasks,
)
from constructs import Construct
from mlopsconstructs.lambdafunc import Lambda

MANAGED_POLICIES = [
    "CloudWatchFullAccess",
    "service-role/AWSLambdaBasicExecutionRole",
    "service-role/AWSLambdaRole",
]


def key_filters(prefix: str, suffix: str) -> List[aws_s3.NotificationKeyFilter]:
    """Build the object key filter, S3 rejects a rule with no prefix or suffix."""
    if not prefix and not suffix:
        return []
    return [aws_s3.NotificationKeyFilter(prefix=prefix or None, suffix=suffix or None)]


class TriggerConstruct(Construct):
    """Start a state machine execution whenever a matching object is uploaded.

    Declares the trigger role, the trigger function running as that role and
    the ``s3:ObjectCreated:*`` subscription on ``resource_bucket``. ``task``
    starts the same state machine from another workflow.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        state_machine: aws_stepfunctions.IStateMachine,
        resource_bucket: aws_s3.IBucket,
        s3_prefix: str,
        s3_suffix: str,
        name_prefix: str = "AutoML-TS-MLOps-Pipeline",
        code_dir: str = "trigger",
        timeout: int = 30,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        bucket_arn = resource_bucket.bucket_arn
        state_machine_arn = state_machine.state_machine_arn

        s3_read_policy = aws_iam.PolicyStatement(
            actions=["s3:GetObject", "s3:ListBucket"],
            resources=[bucket_arn, f"{bucket_arn}/*"],
        )
        start_execution_policy = aws_iam.PolicyStatement(
            actions=["states:StartExecution"],
            resources=[state_machine_arn],
        )

        role_name = f"{name_prefix}-Train-Trigger-Role"
        self.role = aws_iam.Role(
            self,
            role_name,
            assumed_by=aws_iam.ServicePrincipal("lambda.amazonaws.com"),
            role_name=role_name,
            managed_policies=[
                aws_iam.ManagedPolicy.from_aws_managed_policy_name(name)
                for name in MANAGED_POLICIES
            ],
            inline_policies={
                "s3BucketReadOnly": aws_iam.PolicyDocument(
                    statements=[s3_read_policy]
                ),
                "sfnStartExecution": aws_iam.PolicyDocument(
                    statements=[start_execution_policy]
                ),
            },
        )

        function_name = f"{name_prefix}-Upload-Lambda"
        self.trigger_lambda = Lambda(
            self,
            function_name,
            code_dir=code_dir,
            timeout=timeout,
            env={"STEP_FUNCTIONS_ARN": state_machine_arn},
            runtime=aws_lambda.Runtime.PYTHON_3_11,
            handler="index.handler",
            role=self.role,
            function_name=function_name,
        )
        self.function = self.trigger_lambda.function
        self.lambda_ = self.function

        self.event_source = aws_lambda_event_sources.S3EventSourceV2(
            resource_bucket,
            events=[aws_s3.EventType.OBJECT_CREATED],
            filters=key_filters(s3_prefix, s3_suffix),
        )
        self.function.add_event_source(self.event_source)

        self.task = aws_stepfunctions_tasks.StepFunctionsStartExecution(
            self,
            "StartTrainExecution",
            state_machine=state_machine,
            input=aws_stepfunctions.TaskInput.from_json_path_at("$"),
        )
