from .validator import ProductValidator, validate_variant, validate_variant_properties

__all__ = ['ProductValidator', 'validate_variant', 'validate_variant_properties']
