import os
from typing import Any, Dict

import boto3

from domain_names import DomainNameHandler

# --- Environment Configuration ---
API_GATEWAY_REGION = os.environ.get('API_GATEWAY_REGION')

REDACTED_FIELDS = ('certificatePrivateKey',)

# Created on first use and kept while the Lambda container is "warm"
_CLIENT = None


def get_client():
    global _CLIENT
    if _CLIENT is None:
        if API_GATEWAY_REGION:
            _CLIENT = boto3.client('apigateway', region_name=API_GATEWAY_REGION)
        else:
            _CLIENT = boto3.client('apigateway')
    return _CLIENT


def redact(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ('***' if k in REDACTED_FIELDS else v) for k, v in (properties or {}).items()}


def lambda_handler(event: Dict[str, Any], context: Any, client=None) -> Dict[str, Any]:
    """
    Entry point for the custom resource Provider framework.
    1. Validates and repairs the certificate properties (Create/Update).
    2. Creates, updates or deletes the API Gateway custom domain.
    3. Returns the distribution domain name as the resource's Data.
    Raising makes the Provider framework report FAILED to CloudFormation.
    """
    request_type = event.get('RequestType')
    properties = event.get('ResourceProperties') or {}
    print(f"📥 {request_type} request: {redact(properties)}")

    handler = DomainNameHandler(client or get_client())
    response = handler.handle(event).unwrap()

    physical_id = event.get('PhysicalResourceId') or properties.get('domainName')
    print(f"✅ {request_type} of {physical_id} complete: {response}")
    return {
        "PhysicalResourceId": physical_id,
        "Data": response or {}
    }
