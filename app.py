import aws_cdk as cdk
from config import get_config
from stacks.domain_name_stack import DomainNameStack

app = cdk.App()
config = get_config(app)

# =================================================================
# CUSTOM DOMAIN STACK
# =================================================================
# Provisions the API Gateway custom domain and its uploaded certificate
# through a Lambda-backed custom resource.
env = cdk.Environment(account=config.account, region=config.region)
domain_name_stack = DomainNameStack(
    app, f"ApiDomainName-{config.name}",
    config=config,
    env=env
)

app.synth()
