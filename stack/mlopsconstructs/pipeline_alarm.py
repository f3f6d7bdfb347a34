from typing import List

from aws_cdk import (
    Duration,
    aws_cloudwatch,
    aws_cloudwatch_actions,
    aws_lambda,
    aws_sns,
    aws_stepfunctions,
)
from constructs import Construct


class PipelineAlarm(Construct):
    """Notify an SNS topic when training runs fail or uploads fail to start them.

    Training executions are few and long, so any failed, timed out or
    aborted execution within ``period`` raises the alarm.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        state_machine: aws_stepfunctions.IStateMachine,
        trigger_function: aws_lambda.IFunction = None,
        period: Duration = Duration.hours(1),
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)

        self.topic = aws_sns.Topic(self, "TrainFailuresTopic")
        action = aws_cloudwatch_actions.SnsAction(self.topic)

        metrics = {
            "TrainFailed": state_machine.metric_failed(period=period, statistic="Sum"),
            "TrainTimedOut": state_machine.metric_timed_out(
                period=period, statistic="Sum"
            ),
            "TrainAborted": state_machine.metric_aborted(
                period=period, statistic="Sum"
            ),
        }
        if trigger_function is not None:
            metrics["TriggerErrors"] = trigger_function.metric_errors(
                period=period, statistic="Sum"
            )

        self.alarms: List[aws_cloudwatch.Alarm] = []
        for name, metric in metrics.items():
            alarm = metric.create_alarm(
                self,
                f"{name}Alarm",
                threshold=1,
                evaluation_periods=1,
                comparison_operator=(
                    aws_cloudwatch.ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD
                ),
                treat_missing_data=aws_cloudwatch.TreatMissingData.NOT_BREACHING,
            )
            alarm.add_alarm_action(action)
            self.alarms.append(alarm)
