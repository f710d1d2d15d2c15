from models.catalog import ServiceCatalog

GCP_CATALOG = ServiceCatalog.from_mapping({
    "Compute": [
        "Compute Engine", "Google Kubernetes Engine", "Cloud Run",
        "Cloud Functions", "App Engine", "Bare Metal Solution",
    ],
    "Storage": [
        "Cloud Storage", "Persistent Disk", "Filestore",
        "Cloud Storage for Firebase",
    ],
    "Database": [
        "Cloud SQL", "Cloud Spanner", "Firestore",
        "Cloud Bigtable", "Memorystore", "AlloyDB",
    ],
    "Networking": [
        "Cloud Load Balancing", "Cloud CDN", "Cloud DNS",
        "Cloud Interconnect", "Cloud VPN", "Cloud NAT",
        "Cloud Armor", "Traffic Director",
    ],
    "AI & ML": [
        "Vertex AI", "Cloud Natural Language", "Cloud Vision",
        "Cloud Speech-to-Text", "Cloud Text-to-Speech", "Cloud Translation",
        "Gemini", "Document AI",
    ],
    "Data & Analytics": [
        "BigQuery", "Dataflow", "Dataproc", "Pub/Sub",
        "Cloud Composer", "Data Catalog", "Looker",
    ],
    "Application Integration": [
        "Cloud Tasks", "Cloud Scheduler", "Workflows",
        "Eventarc", "API Gateway", "Apigee",
    ],
    "Security & Identity": [
        "Identity and Access Management", "Cloud KMS", "Secret Manager",
        "Security Command Center", "Cloud Identity", "BeyondCorp Enterprise",
    ],
    "Management & Monitoring": [
        "Cloud Monitoring", "Cloud Logging", "Cloud Trace",
        "Cloud Profiler", "Error Reporting", "Cloud Console",
    ],
    "DevOps": [
        "Cloud Build", "Artifact Registry", "Container Registry",
        "Cloud Deploy", "Cloud Source Repositories",
    ],
    "Migration & Transfer": [
        "Database Migration Service", "Transfer Appliance",
        "Storage Transfer Service", "Migrate to Virtual Machines",
    ],
})
