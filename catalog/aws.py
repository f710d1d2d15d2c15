from models.catalog import ServiceCatalog

# AWS exposes no service inventory, so the major services are listed here.
AWS_CATALOG = ServiceCatalog.from_mapping({
    "Compute": [
        "Amazon EC2", "AWS Lambda", "Amazon ECS", "Amazon EKS",
        "AWS Fargate", "Amazon Lightsail", "AWS Batch",
    ],
    "Storage": [
        "Amazon S3", "Amazon EBS", "Amazon EFS", "Amazon Glacier",
        "AWS Storage Gateway",
    ],
    "Database": [
        "Amazon RDS", "Amazon DynamoDB", "Amazon Aurora",
        "Amazon ElastiCache", "Amazon Redshift", "Amazon DocumentDB",
    ],
    "Networking": [
        "Amazon VPC", "Amazon CloudFront", "Amazon Route 53",
        "Elastic Load Balancing", "AWS Direct Connect", "Amazon API Gateway",
    ],
    "Application Integration": [
        "Amazon SQS", "Amazon SNS", "Amazon EventBridge",
        "AWS Step Functions",
    ],
    "Security & Identity": [
        "AWS IAM", "AWS KMS", "Amazon Cognito",
        "AWS WAF", "AWS Shield", "AWS Secrets Manager",
    ],
    "Management & Monitoring": [
        "Amazon CloudWatch", "AWS CloudFormation", "AWS CloudTrail",
        "AWS Systems Manager", "AWS Config",
    ],
    "AI & Machine Learning": [
        "Amazon SageMaker", "Amazon Bedrock", "Amazon Rekognition",
        "Amazon Comprehend", "Amazon Polly", "Amazon Transcribe",
    ],
    "Developer Tools": [
        "AWS CodePipeline", "AWS CodeBuild", "AWS CodeDeploy",
        "AWS CodeCommit",
    ],
    "Analytics": [
        "Amazon Kinesis", "Amazon Athena", "AWS Glue",
        "Amazon EMR", "Amazon OpenSearch Service",
    ],
})
