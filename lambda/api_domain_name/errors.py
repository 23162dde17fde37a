from botocore.exceptions import BotoCoreError, ClientError

# Errors returned by API Gateway are passed through untouched.
ProviderError = ClientError

# Anything the client can raise for a single call: service errors plus
# local failures such as parameter validation or connection errors
PROVIDER_ERRORS = (ClientError, BotoCoreError)

NOT_FOUND_CODE = 'NotFoundException'


class DomainNameError(Exception):
    """Base class for errors raised by the custom domain handler."""


class ValidationError(DomainNameError):
    """
    Raised when a required resource property is missing or empty.
    Always raised before any API Gateway call is made.
    """
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required property {field}")


def error_code(error: Exception) -> str:
    """Returns the AWS error code of a provider error, or '' for anything else."""
    if isinstance(error, ProviderError):
        return error.response.get('Error', {}).get('Code', '')
    return ''
