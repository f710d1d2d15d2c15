from catalog.aws import AWS_CATALOG
from catalog.azure import AZURE_CATALOG
from catalog.gcp import GCP_CATALOG

__all__ = ["AWS_CATALOG", "AZURE_CATALOG", "GCP_CATALOG"]
