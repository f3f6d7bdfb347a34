import os
from typing import Dict

from aws_cdk import Duration, aws_iam, aws_lambda
from constructs import Construct
from utils import align


class Lambda(Construct):
    """AWS Lambda Construct."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        memory: int = 512,
        timeout: int = 5,
        code_dir: str = None,
        code_str: str = None,
        env: Dict = None,
        runtime: aws_lambda.Runtime = aws_lambda.Runtime.PYTHON_3_11,
        handler: str = "index.handler",
        role: aws_iam.IRole = None,
        function_name: str = None,
        **kwargs,
    ) -> None:
        """Create AWS Lambda construct."""
        super().__init__(scope, id, **kwargs)

        if code_dir is not None:
            if not os.path.isabs(code_dir):
                code_dir = os.path.join(
                    os.path.dirname(__file__),
                    "..",
                    "..",
                    "lambda_functions",
                    code_dir,
                )
            self.code = aws_lambda.Code.from_asset(code_dir)
        elif code_str is not None:
            self.code = aws_lambda.InlineCode(code=align(code_str))
        else:
            raise ValueError("Must define function code")

        self.handler = handler

        self.function = aws_lambda.Function(
            self,
            "function",
            code=self.code,
            handler=self.handler,
            memory_size=memory,
            timeout=Duration.seconds(timeout),
            runtime=runtime,
            environment=env,
            role=role,
            function_name=function_name,
        )

        self.invoke_policy_statement = aws_iam.PolicyStatement(
            resources=[self.function.function_arn],
            actions=[
                "lambda:InvokeFunction",
            ],
        )
