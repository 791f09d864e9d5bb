"""Core configuration for storefront-client."""
