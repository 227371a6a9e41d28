"""Business identity extraction and valuation from storefront photos."""
