from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from certificates import CERTIFICATE_FIELDS, CertificateReference, certificate_source
from errors import NOT_FOUND_CODE, PROVIDER_ERRORS, ValidationError, error_code
from properties import build_patch_operations, validate_event

# Injected by CloudFormation and the Provider framework, not API Gateway parameters
FRAMEWORK_FIELDS = ('ServiceToken', 'ServiceTimeout')
CERTIFICATE_ARN = 'certificateArn'


@dataclass(frozen=True)
class Result:
    """
    Outcome of one lifecycle action: either a value or an error, never both.
    """
    value: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[Dict[str, Any]]:
        if self.error is not None:
            raise self.error
        return self.value

    def deliver(self, callback: Callable[[Optional[Exception], Optional[Dict[str, Any]]], Any]) -> Any:
        """Hands the outcome to an (error, response) completion callback."""
        return callback(self.error, self.value)


def create_params(properties: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Builds the CreateDomainName request for whichever certificate source the
    properties describe: an ACM reference or the uploaded PEM triple, never both.
    """
    params = {k: v for k, v in properties.items() if k not in FRAMEWORK_FIELDS}
    if isinstance(certificate_source(params), CertificateReference):
        for field in CERTIFICATE_FIELDS:
            params.pop(field, None)
    else:
        params.pop(CERTIFICATE_ARN, None)
    return params


def _domain_name_result(api_domain_name: Mapping[str, Any]) -> Dict[str, Any]:
    return {'distributionDomainName': api_domain_name.get('distributionDomainName')}


class DomainNameHandler:
    """
    Maps CloudFormation lifecycle events onto API Gateway custom domain calls.
    Every action is a single attempt: provider errors are returned as-is.
    """
    def __init__(self, client):
        self.client = client

    def handle(self, event: Mapping[str, Any]) -> Result:
        request_type = event.get('RequestType')

        if request_type == 'Delete':
            return self.delete(event)
        if request_type not in ('Create', 'Update'):
            return Result(error=ValueError(f"Invalid request type: {request_type}"))

        validated = self.validate(event)
        if not validated.ok:
            return validated

        if request_type == 'Create':
            return self.create(validated.value)
        return self.update(validated.value)

    def validate(self, event: Mapping[str, Any]) -> Result:
        try:
            return Result(value=validate_event(event))
        except ValidationError as e:
            print(f"❌ Validation failed: {e}")
            return Result(error=e)

    def create(self, event: Mapping[str, Any]) -> Result:
        params = create_params(event['ResourceProperties'])

        source = certificate_source(event['ResourceProperties'])
        if isinstance(source, CertificateReference):
            print(f"🔐 Creating {params.get('domainName')} with ACM certificate {source.arn}")
        else:
            print(f"🔐 Creating {params.get('domainName')} with uploaded certificate {params.get('certificateName')}")

        try:
            api_domain_name = self.client.create_domain_name(**params)
        except PROVIDER_ERRORS as e:
            print(f"CreateDomainName Error: {e}")
            return Result(error=e)
        return Result(value=_domain_name_result(api_domain_name))

    def update(self, event: Mapping[str, Any]) -> Result:
        properties = event['ResourceProperties']
        patch_operations = build_patch_operations(properties, event.get('OldResourceProperties'))

        # Nothing to change: report the current state
        if not patch_operations:
            return self.get(properties['domainName'])

        print(f"✏️ Updating {properties['domainName']}: {patch_operations}")
        try:
            api_domain_name = self.client.update_domain_name(
                domainName=properties['domainName'],
                patchOperations=patch_operations
            )
        except PROVIDER_ERRORS as e:
            print(f"UpdateDomainName Error: {e}")
            return Result(error=e)
        return Result(value=_domain_name_result(api_domain_name))

    def get(self, domain_name: str) -> Result:
        try:
            api_domain_name = self.client.get_domain_name(domainName=domain_name)
        except PROVIDER_ERRORS as e:
            print(f"GetDomainName Error: {e}")
            return Result(error=e)
        return Result(value=_domain_name_result(api_domain_name))

    def delete(self, event: Mapping[str, Any]) -> Result:
        domain_name = event['ResourceProperties']['domainName']
        try:
            self.client.delete_domain_name(domainName=domain_name)
        except PROVIDER_ERRORS as e:
            # Already gone counts as deleted
            if error_code(e) == NOT_FOUND_CODE:
                print(f"⏭️ {domain_name} not found, nothing to delete")
                return Result()
            print(f"DeleteDomainName Error: {e}")
            return Result(error=e)
        return Result()
