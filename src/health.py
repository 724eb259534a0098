import json

from utils import __version__
from utils.http import get_method
from utils.logger import get_logger

logger = get_logger("health")


def lambda_handler(event, context):
    logger.info(
        "health.check",
        extra={"method": get_method(event) or "GET"},
    )
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"status": "ok", "version": __version__}),
    }
