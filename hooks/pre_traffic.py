import json
import boto3
import os
import logging

logger = logging.getLogger()
logger.setLevel(logging.INFO)

codedeploy = boto3.client('codedeploy')
lambda_client = boto3.client('lambda')


class SmokeTestError(Exception):
    """Raised when the new function version fails a smoke test."""
    pass


def preflight_event(origin: str) -> dict:
    """OPTIONS request as delivered by API Gateway; no provider is ever called."""
    return {
        'httpMethod': 'OPTIONS',
        'path': '/smoke-test',
        'headers': {'Origin': origin},
        'body': None
    }


def check_preflight_response(response_payload: dict) -> None:
    """
    Validate a preflight response from the contact form handlers.

    Raises:
        SmokeTestError: If the status is not 200 or the CORS origin header is missing
    """
    if response_payload.get('statusCode') != 200:
        raise SmokeTestError(f"Invalid preflight status: {response_payload.get('statusCode')}")

    headers = response_payload.get('headers') or {}
    if not headers.get('Access-Control-Allow-Origin'):
        raise SmokeTestError("Preflight response is missing Access-Control-Allow-Origin")


def lambda_handler(event, context):
    """
    Pre-traffic hook for CodeDeploy.
    Sends a CORS preflight to the new version before shifting traffic to it.
    """
    logger.info(f"Pre-traffic hook triggered: {json.dumps(event)}")

    deployment_id = event['DeploymentId']
    lifecycle_event_hook_execution_id = event['LifecycleEventHookExecutionId']

    try:
        target_function = os.environ.get('TARGET_FUNCTION')
        origin = os.environ.get('SMOKE_TEST_ORIGIN', 'https://example.com')

        logger.info(f"Running preflight smoke test on {target_function}")

        response = lambda_client.invoke(
            FunctionName=target_function,
            InvocationType='RequestResponse',
            Payload=json.dumps(preflight_event(origin))
        )

        response_payload = json.loads(response['Payload'].read())
        logger.info(f"Test response: {json.dumps(response_payload)}")

        if response.get('FunctionError'):
            raise SmokeTestError(f"Function returned error: {response_payload}")

        if response.get('StatusCode') != 200:
            raise SmokeTestError(f"Unexpected invoke status code: {response.get('StatusCode')}")

        check_preflight_response(response_payload)

        logger.info("Pre-traffic validation passed")

        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Succeeded'
        )

        return {
            'statusCode': 200,
            'body': json.dumps('Pre-traffic validation succeeded')
        }

    except Exception as e:
        logger.error(f"Pre-traffic validation failed: {str(e)}", exc_info=True)

        # Report failure - this will prevent deployment
        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Failed'
        )

        return {
            'statusCode': 500,
            'body': json.dumps(f'Pre-traffic validation failed: {str(e)}')
        }
