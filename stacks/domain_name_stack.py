import tldextract
from aws_cdk import (
    Stack,
    Duration,
    CfnOutput,
    CustomResource,
    aws_lambda as lambda_,
    aws_iam as iam,
    aws_route53 as route53,
    custom_resources as cr,
)
from constructs import Construct

class DomainNameStack(Stack):
    """
    Deploys an API Gateway custom domain backed by an uploaded certificate:
    1. Lambda Function that manages the domain through the API Gateway API.
    2. Custom Resource (Provider framework) feeding it the certificate properties.
    3. Optional Route53 CNAME pointing the domain at its CloudFront distribution.
    """
    def __init__(self, scope: Construct, construct_id: str, config, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # 1. DOMAIN NAME HANDLER FUNCTION
        # =================================================================
        self.handler_fn = lambda_.Function(self, "DomainNameHandlerFn",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler="main.lambda_handler",
            code=lambda_.Code.from_asset("lambda/api_domain_name"),
            timeout=Duration.minutes(5),
            environment={
                "API_GATEWAY_REGION": self.region
            }
        )

        # =================================================================
        # 2. PERMISSIONS & LEAST PRIVILEGE
        # =================================================================
        self.handler_fn.add_to_role_policy(iam.PolicyStatement(
            actions=["apigateway:POST", "apigateway:PATCH", "apigateway:GET", "apigateway:DELETE"],
            resources=[
                f"arn:aws:apigateway:{self.region}::/domainnames",
                f"arn:aws:apigateway:{self.region}::/domainnames/*"
            ]
        ))
        # Edge-optimized domains are served through a CloudFront distribution
        # and the uploaded certificate is imported into ACM by API Gateway
        self.handler_fn.add_to_role_policy(iam.PolicyStatement(
            actions=[
                "cloudfront:UpdateDistribution",
                "acm:ImportCertificate",
                "acm:DeleteCertificate",
                "acm:DescribeCertificate",
                "iam:UploadServerCertificate",
                "iam:DeleteServerCertificate",
                "iam:GetServerCertificate"
            ],
            resources=["*"]
        ))

        # =================================================================
        # 3. CUSTOM RESOURCE
        # =================================================================
        provider = cr.Provider(self, "DomainNameProvider",
            on_event_handler=self.handler_fn
        )

        self.domain_name = CustomResource(self, "ApiDomainName",
            service_token=provider.service_token,
            resource_type="Custom::ApiGatewayDomainName",
            removal_policy=config.removal_policy,
            properties={
                "domainName": config.domain_name,
                "certificateName": config.certificate_name,
                "certificateBody": config.certificate_body,
                "certificateChain": config.certificate_chain,
                "certificatePrivateKey": config.certificate_private_key
            }
        )
        self.distribution_domain_name = self.domain_name.get_att_string("distributionDomainName")

        # =================================================================
        # 4. DNS MANAGEMENT (Route53)
        # =================================================================
        if config.hosted_zone_name:
            zone_name = config.hosted_zone_name
            # Root Zone of the domain (e.g., 'example.com' from 'api.example.com')
            if zone_name == "auto":
                extracted = tldextract.extract(config.domain_name)
                zone_name = f"{extracted.domain}.{extracted.suffix}"
            hosted_zone = route53.HostedZone.from_lookup(self, "HostedZone", domain_name=zone_name)

            route53.CnameRecord(self, "DomainCnameRecord",
                zone=hosted_zone,
                record_name=config.domain_name,
                domain_name=self.distribution_domain_name
            )

        # =================================================================
        # 5. OUTPUTS
        # =================================================================
        CfnOutput(self, "CustomDomainName", value=config.domain_name)
        CfnOutput(self, "DistributionDomainName", value=self.distribution_domain_name)
