"""
Record Codec

Converts products to and from the JSON records shared with the web app.

The variant block uses the web app's camelCase keys (isBase, costPrice...).
Product records use snake_case with `_id`, and also carry the legacy alias
fields (id, name, stock, barcode, description) older screens still read.
"""

from typing import Any, Dict, List, Optional

from ..models import Attribute, Product, Unit, Variant, VariantProperties

PRODUCT_FIELDS = (
    'tenant_id', 'industry_id', 'product_type_id', 'product_category_id', 'brand_id',
    'brand', 'code', 'title', 'brief', 'content', 'price', 'prices', 'cost_price',
    'quantity', 'waiting_quantity', 'is_sold_out', 'status', 'image', 'other_images',
    'created_at', 'updated_at', 'deleted_at',
)
LEGACY_ALIAS_FIELDS = ('id', 'name', 'stock', 'barcode', 'description')


def _number(value, default: float = 0) -> float:
    if value is None or value == "":
        return default
    return float(value)


def _optional_number(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def unit_to_dict(unit: Unit) -> Dict[str, Any]:
    data = {
        'id': unit.id,
        'name': unit.name,
        'conversion': unit.conversion,
        'isBase': unit.is_base,
        'isDirectSale': unit.is_direct_sale,
    }
    if unit.price is not None:
        data['price'] = unit.price
    return data


def unit_from_dict(data: Dict[str, Any]) -> Unit:
    return Unit(
        id=str(data.get('id', '')),
        name=data.get('name', ''),
        conversion=_number(data.get('conversion'), 1),
        is_base=bool(data.get('isBase', False)),
        price=_optional_number(data.get('price')),
        is_direct_sale=bool(data.get('isDirectSale', True)),
    )


def attribute_to_dict(attr: Attribute) -> Dict[str, Any]:
    return {
        'id': attr.id,
        'name': attr.name,
        'isCustom': attr.is_custom,
        'values': list(attr.values),
    }


def attribute_from_dict(data: Dict[str, Any]) -> Attribute:
    return Attribute(
        id=str(data.get('id', '')),
        name=data.get('name', ''),
        is_custom=bool(data.get('isCustom', False)),
        values=[str(v) for v in data.get('values') or []],
    )


def variant_to_dict(variant: Variant) -> Dict[str, Any]:
    return {
        'id': variant.id,
        'attributes': dict(variant.attributes),
        'unit': variant.unit,
        'conversion': variant.conversion,
        'code': variant.code,
        'barcode': variant.barcode,
        'costPrice': variant.cost_price,
        'price': variant.price,
        'stock': variant.stock,
    }


def variant_from_dict(data: Dict[str, Any]) -> Variant:
    # The stored id is not kept: identity comes from the content
    return Variant(
        attributes={str(k): str(v) for k, v in (data.get('attributes') or {}).items()},
        unit=data.get('unit') or '',
        conversion=_number(data.get('conversion'), 1),
        code=data.get('code') or '',
        barcode=data.get('barcode') or '',
        cost_price=_number(data.get('costPrice')),
        price=_number(data.get('price')),
        stock=int(_number(data.get('stock'))),
    )


def variant_properties_to_dict(properties: VariantProperties) -> Dict[str, List[Dict[str, Any]]]:
    return {
        'units': [unit_to_dict(u) for u in properties.units],
        'attributes': [attribute_to_dict(a) for a in properties.attributes],
        'variants': [variant_to_dict(v) for v in properties.variants],
    }


def variant_properties_from_dict(data: Dict[str, Any]) -> VariantProperties:
    return VariantProperties(
        units=[unit_from_dict(u) for u in data.get('units') or []],
        attributes=[attribute_from_dict(a) for a in data.get('attributes') or []],
        variants=[variant_from_dict(v) for v in data.get('variants') or []],
    )


def product_to_record(product: Product) -> Dict[str, Any]:
    """
    Serialize a product for storage.

    Returns:
        JSON-serializable record including legacy alias fields
    """
    record: Dict[str, Any] = dict(product.extra)
    record['_id'] = product.id
    for name in PRODUCT_FIELDS:
        record[name] = getattr(product, name)

    record['variant_properties'] = (
        variant_properties_to_dict(product.variant_properties)
        if product.variant_properties is not None else None
    )

    # Legacy aliases
    record['id'] = product.id
    record['name'] = product.title
    record['stock'] = product.quantity
    record['barcode'] = product.code
    record['description'] = product.brief
    return record


def product_from_record(record: Dict[str, Any]) -> Product:
    """Parse a record already in the current schema."""
    known = set(PRODUCT_FIELDS) | set(LEGACY_ALIAS_FIELDS) | {'_id', 'variant_properties'}
    variant_properties = record.get('variant_properties')

    return Product(
        id=str(record['_id']),
        title=record.get('title') or '',
        code=record.get('code') or '',
        tenant_id=record.get('tenant_id') or '',
        industry_id=record.get('industry_id') or '',
        product_type_id=record.get('product_type_id'),
        product_category_id=record.get('product_category_id'),
        brand_id=record.get('brand_id'),
        brand=record.get('brand') or '',
        brief=record.get('brief'),
        content=record.get('content'),
        price=_optional_number(record.get('price')),
        prices=record.get('prices'),
        cost_price=_optional_number(record.get('cost_price')),
        quantity=int(_number(record.get('quantity'))),
        waiting_quantity=int(_number(record.get('waiting_quantity'))),
        is_sold_out=bool(record.get('is_sold_out', False)),
        status=int(_number(record.get('status'), 1)),
        image=record.get('image'),
        other_images=record.get('other_images'),
        created_at=record.get('created_at') or '',
        updated_at=record.get('updated_at') or '',
        deleted_at=record.get('deleted_at'),
        variant_properties=(
            variant_properties_from_dict(variant_properties)
            if isinstance(variant_properties, dict) else None
        ),
        extra={k: v for k, v in record.items() if k not in known},
    )
