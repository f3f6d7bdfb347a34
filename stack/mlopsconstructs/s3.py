import boto3
import botocore
from aws_cdk import aws_s3
from constructs import Construct


# Creates new S3 bucket. If bucket already exists will connect to existing bucket.
class S3(Construct):
    def __init__(
        self,
        scope: Construct,
        id: str,
        bucket_name: str = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)
        if bucket_name is None:
            bucket_name = f"{id}-bucket"

        try:
            boto3.client("s3").head_bucket(Bucket=bucket_name)
            bucket = aws_s3.Bucket.from_bucket_name(self, "bucket", bucket_name)
            self.imported = True
        except botocore.exceptions.ClientError:
            bucket = aws_s3.Bucket(
                self,
                "bucket",
                bucket_name=bucket_name,
                block_public_access=aws_s3.BlockPublicAccess.BLOCK_ALL,
                encryption=aws_s3.BucketEncryption.S3_MANAGED,
            )
            self.imported = False

        self.bucket = bucket
        self.bucket_name = bucket.bucket_name
        self.bucket_arn = bucket.bucket_arn
