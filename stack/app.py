import os

from aws_cdk import App, Environment
from stack import MlopsStack

# Required env settings
STACKNAME = os.environ["MLOPS_STACKNAME"]

# Optional env settings
ACCOUNT = os.getenv("MLOPS_ACCOUNT", None)
REGION = os.getenv("AWS_DEFAULT_REGION", None)

app = App()
if ACCOUNT:
    mlops_stack = MlopsStack(
        app,
        STACKNAME,
        stack_name=STACKNAME,
        env=Environment(account=ACCOUNT, region=REGION),
    )
else:
    mlops_stack = MlopsStack(app, STACKNAME, stack_name=STACKNAME)

app.synth()
