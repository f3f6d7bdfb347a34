import os

from aws_cdk import CfnOutput, Stack, aws_stepfunctions
from constructs import Construct
from mlopsconstructs.pipeline_alarm import PipelineAlarm
from mlopsconstructs.s3 import S3
from mlopsconstructs.trigger import TriggerConstruct
from utils import getenv, getflag

# Required env settings
TRAIN_STATE_MACHINE_ARN = os.environ["MLOPS_TRAIN_STATE_MACHINE_ARN"]

# Optional env settings
RESOURCE_BUCKET = getenv("MLOPS_RESOURCE_BUCKET", None)
S3_PREFIX = getenv("MLOPS_S3_PREFIX", "train/")
S3_SUFFIX = getenv("MLOPS_S3_SUFFIX", ".csv")
NAME_PREFIX = getenv("MLOPS_NAME_PREFIX", "AutoML-TS-MLOps-Pipeline")
USE_CLOUD_WATCH = getflag("MLOPS_USE_CLOUD_WATCH", "true")


class MlopsStack(Stack):
    def __init__(
        self,
        scope: Construct,
        id: str,
        train_state_machine_arn: str = TRAIN_STATE_MACHINE_ARN,
        resource_bucket: str = RESOURCE_BUCKET,
        s3_prefix: str = S3_PREFIX,
        s3_suffix: str = S3_SUFFIX,
        name_prefix: str = NAME_PREFIX,
        use_cloud_watch: bool = USE_CLOUD_WATCH,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)

        if resource_bucket is None:
            resource_bucket = f"{id.lower()}-resource-bucket"
        self.resource_bucket = S3(self, "ResourceBucket", bucket_name=resource_bucket)

        self.train_state_machine = aws_stepfunctions.StateMachine.from_state_machine_arn(
            self, "TrainStateMachine", train_state_machine_arn
        )

        self.trigger = TriggerConstruct(
            self,
            "TrainTrigger",
            state_machine=self.train_state_machine,
            resource_bucket=self.resource_bucket.bucket,
            s3_prefix=s3_prefix,
            s3_suffix=s3_suffix,
            name_prefix=name_prefix,
        )

        if use_cloud_watch:
            self.train_alarm = PipelineAlarm(
                self,
                "TrainAlarm",
                state_machine=self.train_state_machine,
                trigger_function=self.trigger.function,
            )

        CfnOutput(self, "triggerfunction", value=self.trigger.function.function_name)
        CfnOutput(self, "triggerrole", value=self.trigger.role.role_arn)
