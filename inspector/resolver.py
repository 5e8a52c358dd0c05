# Цей файл знаходиться в: inspector/resolver.py

import json
from typing import Any, Dict, NamedTuple, Optional

from inspector.models import SchemaNode


class SchemaIdentity(NamedTuple):
    name: Optional[str]
    ref_path: Optional[str]


def _normalize(value: Any) -> Any:
    # YAML може дати ключі-числа, а json.dumps(sort_keys=True) не вміє сортувати змішані ключі
    if isinstance(value, dict):
        return {str(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_normalize(item) for item in value]
    return value


def canonical_json(body: Dict[str, Any]) -> str:
    """
    Канонічний JSON схеми: ключі відсортовані, без пробілів.
    Використовується тільки як ключ для порівняння структур.
    """
    return json.dumps(_normalize(body), sort_keys=True, separators=(",", ":"),
                      ensure_ascii=False, default=str)


def build_schema_index(component_schemas: Dict[str, SchemaNode]) -> Dict[str, str]:
    """
    Будує індекс "канонічний JSON -> ім'я схеми" для components/schemas.
    Якщо дві схеми структурно однакові, перемагає та, що оголошена пізніше.
    """
    index = {}
    for name, schema in component_schemas.items():
        index[canonical_json(schema.body)] = name
    return index


def _name_from_reference(schema: SchemaNode) -> Optional[str]:
    if schema.ref_title:
        return schema.ref_title
    if schema.ref:
        # '#/components/schemas/Pet' -> 'Pet'
        return schema.ref.split('/')[-1] or None
    return None


def resolve_schema_name(schema: Optional[SchemaNode], index: Dict[str, str]) -> Optional[str]:
    if schema is None:
        return None

    # 1. Масив називаємо за типом елемента
    item = schema.items
    if schema.is_array and item is not None and (item.is_reference or item.title):
        return resolve_schema_name(item, index)

    # 2-3. Явне посилання: заголовок цілі або останній сегмент $ref
    if schema.is_reference:
        name = _name_from_reference(schema)
        if name:
            return name

    # 4. Власний title
    actual = schema.actual
    if schema.title:
        return schema.title
    if actual.title:
        return actual.title

    # 5. Структурний збіг з однією з components/schemas
    return index.get(canonical_json(actual.body))


def resolve_type_name(schema: Optional[SchemaNode], index: Dict[str, str]) -> Optional[str]:
    """
    Ім'я для рядка "Type Name" у дереві. Якщо розіменована схема - масив,
    називаємо її за елементом (навіть коли це посилання на компонент-масив).
    """
    if schema is None:
        return None
    actual = schema.actual
    if actual.is_array and actual.items is not None:
        return resolve_schema_name(actual.items, index)
    return resolve_schema_name(schema, index)


def resolve_schema_identity(schema: Optional[SchemaNode], index: Dict[str, str]) -> SchemaIdentity:
    """
    Визначає ім'я схеми в місці використання і, якщо це пряме посилання,
    сирий $ref. Відсутність імені - нормальний результат, не помилка.
    """
    if schema is None:
        return SchemaIdentity(name=None, ref_path=None)
    ref_path = schema.ref if schema.is_reference else None
    return SchemaIdentity(name=resolve_schema_name(schema, index), ref_path=ref_path)
