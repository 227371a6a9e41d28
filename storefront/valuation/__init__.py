"""Valuation factor derivation and scoring."""
from storefront.valuation.categories import categorize_business_industry
from storefront.valuation.factors import derive_valuation_factors
from storefront.valuation.scorer import estimate_business_value

__all__ = ["categorize_business_industry", "derive_valuation_factors", "estimate_business_value"]
