"""ekstrap - EC2 instance capability tables and EKS worker node helpers."""

__version__ = "0.1.0"
