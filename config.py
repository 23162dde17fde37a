import os
from typing import Optional
from dotenv import load_dotenv
from aws_cdk import RemovalPolicy

# Load environment variables from a .env file
load_dotenv()

class EnvConfig:
    """
    Stores environment-specific configuration for the custom domain stack.
    """
    def __init__(
        self,
        env_name: str,
        account: str,
        region: str,
        domain: str,
        certificate_name: str,
        certificate_body: str,
        certificate_chain: str,
        certificate_private_key: str,
        hosted_zone_name: Optional[str] = None
    ):
        self.name = env_name
        self.account = account
        self.region = region
        self.domain_name = domain
        self.certificate_name = certificate_name

        # PEM contents, read at synth time
        self.certificate_body = certificate_body
        self.certificate_chain = certificate_chain
        self.certificate_private_key = certificate_private_key

        # Route53 zone for the CNAME record ('auto' derives it from the domain)
        self.hosted_zone_name = hosted_zone_name

        # Data Lifecycle Policy:
        # In 'prod', the custom domain outlives the stack so DNS keeps resolving.
        # In other environments, we clean up to save costs.
        if env_name == 'prod':
            self.removal_policy = RemovalPolicy.RETAIN
        else:
            self.removal_policy = RemovalPolicy.DESTROY

def get_required_env(key: str) -> str:
    """
    Retrieves a required environment variable or raises a RuntimeError if missing.
    """
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"❌ MISSING CONFIG: Required environment variable '{key}' not found in .env")
    return value

def read_pem_file(key: str) -> str:
    """
    Reads the PEM file whose path is stored in a required environment variable.
    """
    path = get_required_env(key)
    try:
        with open(path, encoding="utf-8") as f:
            return f.read().strip()
    except OSError as e:
        raise RuntimeError(f"❌ MISSING CONFIG: Cannot read '{path}' from '{key}': {e}") from e

def get_config(scope) -> EnvConfig:
    """
    Factory function to generate the EnvConfig object based on CDK context.
    Usage: cdk deploy -c env=prod
    """
    # Default to 'dev' environment if no context is provided
    env_name = scope.node.try_get_context("env") or "dev"
    prefix = env_name.upper()

    print(f"🔍 Initializing Custom Domain Infrastructure for environment: {prefix}")

    # Load Mandatory Variables
    account = get_required_env(f"{prefix}_ACCOUNT")
    region = get_required_env(f"{prefix}_REGION")
    domain = get_required_env(f"{prefix}_DOMAIN_NAME")
    certificate_name = get_required_env(f"{prefix}_CERTIFICATE_NAME")

    certificate_body = read_pem_file(f"{prefix}_CERTIFICATE_BODY_FILE")
    certificate_chain = read_pem_file(f"{prefix}_CERTIFICATE_CHAIN_FILE")
    certificate_private_key = read_pem_file(f"{prefix}_CERTIFICATE_PRIVATE_KEY_FILE")

    # Load Optional Variables
    hosted_zone_name = os.getenv(f"{prefix}_HOSTED_ZONE_NAME")

    return EnvConfig(
        env_name=env_name,
        account=account,
        region=region,
        domain=domain,
        certificate_name=certificate_name,
        certificate_body=certificate_body,
        certificate_chain=certificate_chain,
        certificate_private_key=certificate_private_key,
        hosted_zone_name=hosted_zone_name
    )
