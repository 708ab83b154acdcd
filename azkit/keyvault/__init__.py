"""
Azure Key Vault data plane clients.
"""
