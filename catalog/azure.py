from models.catalog import ServiceCatalog

AZURE_CATALOG = ServiceCatalog.from_mapping({
    "Compute": [
        "Virtual Machines", "Virtual Machine Scale Sets", "App Service",
        "App Service (Linux)", "Azure Functions", "Azure Kubernetes Service (AKS)",
        "Container Instances", "Batch", "Cloud Services",
        "Azure Spring Apps",
    ],
    "Storage": [
        "Storage Accounts", "Azure Backup", "Azure Site Recovery",
        "StorSimple", "Azure NetApp Files", "Azure HPC Cache",
        "Azure Managed Lustre",
    ],
    "Database": [
        "Azure Cosmos DB", "Azure SQL Database", "Azure Database for MySQL",
        "Azure Database for PostgreSQL", "Azure Database for MariaDB",
        "Azure Cache for Redis", "Azure SQL Managed Instance",
    ],
    "Networking": [
        "Virtual Network", "Load Balancer", "VPN Gateway",
        "Application Gateway", "Azure Firewall", "Azure DDoS Protection",
        "Network Infrastructure", "ExpressRoute Circuits",
        "Azure Private Link", "Azure Front Door", "Virtual WAN",
        "Network Watcher", "Web Application Firewall",
    ],
    "AI & Machine Learning": [
        "Azure Machine Learning", "Cognitive Services", "Azure AI services",
        "Azure AI Search", "Azure AI Language", "Azure AI Vision",
        "Azure AI Speech", "Azure AI Translator", "Azure OpenAI",
    ],
    "Integration & Messaging": [
        "Service Bus", "Event Grid", "Event Hubs", "API Management",
        "Logic Apps", "Notification Hubs", "Azure SignalR Service",
    ],
    "Identity & Security": [
        "Azure Active Directory", "Key Vault", "Azure Sentinel",
        "Microsoft Defender for Cloud", "Azure DDoS Protection",
    ],
    "Management & Monitoring": [
        "Azure Monitor", "Log Analytics", "Azure Resource Manager",
        "Automation", "Azure Policy", "Azure Advisor",
    ],
    "Analytics": [
        "Azure Synapse Analytics", "HDInsight", "Azure Databricks",
        "Azure Data Factory", "Azure Stream Analytics",
        "Azure Data Explorer", "Power BI Embedded",
    ],
    "DevOps": [
        "Azure DevOps", "Azure DevTest Labs", "Container Registry",
    ],
})
