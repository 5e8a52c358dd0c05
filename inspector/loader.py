# Цей файл знаходиться в: inspector/loader.py

import json
import os
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import yaml

from inspector.models import (
    MediaType,
    OpenAPIDocument,
    Operation,
    Parameter,
    ParameterLocation,
    PathItem,
    RequestBody,
    Response,
    SchemaKind,
    SchemaNode,
)

SUPPORTED_EXTENSIONS = (".json", ".yaml", ".yml")
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
DEFAULT_MEDIA_TYPE = "application/json"

# Ключі параметра Swagger 2.0, які насправді описують його схему
SWAGGER2_SCHEMA_KEYS = (
    "type", "format", "items", "enum", "default", "collectionFormat",
    "minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum",
    "minLength", "maxLength", "pattern", "minItems", "maxItems", "uniqueItems",
    "multipleOf",
)

OBJECT_KEYS = ("properties", "additionalProperties", "allOf", "oneOf", "anyOf")


def _text(value: Any) -> Optional[str]:
    # YAML читає `Yes` як bool, а `2024` як int; у моделі це рядки
    if value is None:
        return None
    return str(value)


class SpecLoadError(Exception):
    """Файл специфікації не вдалося прочитати або розібрати."""


class UnsupportedSpecFormatError(SpecLoadError):
    """Розширення файлу не .json / .yaml / .yml."""


class SpecParser:
    """
    Модуль 1: Парсер.
    Відповідає за читання openapi.json / openapi.yaml та побудову
    об'єктної моделі документа (шляхи, операції, схеми).
    Локальні $ref посилання розіменовуються, зовнішні - ні.
    """
    def __init__(self, filepath: str):
        self.filepath = str(filepath)
        extension = os.path.splitext(self.filepath)[1].lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedSpecFormatError("File must be .json or .yaml")

        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                if extension == ".json":
                    self.spec = json.load(f)
                else:
                    self.spec = yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise SpecLoadError(f"Файл {self.filepath} має неправильний JSON формат: {e}") from e
        except yaml.YAMLError as e:
            raise SpecLoadError(f"Файл {self.filepath} має неправильний YAML формат: {e}") from e

        if not isinstance(self.spec, dict):
            raise SpecLoadError(f"Файл {self.filepath} не містить OpenAPI документа.")

        self.is_swagger2 = str(self.spec.get('swagger', '')).startswith('2')
        if self.is_swagger2:
            self.schemas = self.spec.get('definitions') or {}
        else:
            self.schemas = (self.spec.get('components') or {}).get('schemas') or {}

        # $ref, які зараз розіменовуються (захист від циклічних схем)
        self._resolving = set()

    def _get_object_from_ref(self, ref_string: str) -> Optional[Any]:
        """
        Допоміжна функція: знаходить об'єкт за локальним $ref посиланням.
        Приклад ref_string: '#/components/schemas/Item'
        Для зовнішніх або "битих" посилань повертає None.
        """
        if not isinstance(ref_string, str) or not ref_string.startswith('#'):
            return None

        node: Any = self.spec
        pointer = ref_string[1:]
        if not pointer:
            return node

        for token in pointer.split('/')[1:]:
            token = unquote(token).replace('~1', '/').replace('~0', '~')
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            else:
                return None
        return node

    def _deref(self, raw: Any) -> Dict[str, Any]:
        """Розіменовує параметр / тіло запиту / відповідь (ланцюжок $ref)."""
        seen = set()
        while isinstance(raw, dict) and '$ref' in raw:
            ref = raw['$ref']
            if ref in seen:
                return {}
            seen.add(ref)
            raw = self._get_object_from_ref(ref)
        return raw if isinstance(raw, dict) else {}

    def _build_schema(self, raw: Any) -> Optional[SchemaNode]:
        if not isinstance(raw, dict):
            return None

        if '$ref' in raw:
            ref = raw['$ref']
            target_raw = self._get_object_from_ref(ref)
            ref_title = None
            target = None
            if isinstance(target_raw, dict):
                ref_title = _text(target_raw.get('title'))
                if ref not in self._resolving:
                    self._resolving.add(ref)
                    try:
                        target = self._build_schema(target_raw)
                    finally:
                        self._resolving.discard(ref)
            return SchemaNode(
                kind=SchemaKind.REFERENCE,
                body=raw,
                title=_text(raw.get('title')),
                ref=ref,
                ref_title=ref_title,
                target=target,
            )

        schema_type = raw.get('type')
        if isinstance(schema_type, list):
            # OpenAPI 3.1: ["string", "null"]
            schema_type = next((t for t in schema_type if t != 'null'), None)

        if schema_type == 'array' or 'items' in raw:
            kind = SchemaKind.ARRAY
        elif schema_type == 'object' or any(key in raw for key in OBJECT_KEYS):
            kind = SchemaKind.OBJECT
        else:
            kind = SchemaKind.PRIMITIVE

        return SchemaNode(
            kind=kind,
            body=raw,
            title=_text(raw.get('title')),
            type=schema_type,
            items=self._build_schema(raw.get('items')) if kind == SchemaKind.ARRAY else None,
        )

    def _build_content(self, content: Any) -> Dict[str, MediaType]:
        result = {}
        for content_type, media in (content or {}).items():
            media = media or {}
            result[str(content_type)] = MediaType(schema_node=self._build_schema(media.get('schema')))
        return result

    def _media_types(self, method_info: Dict[str, Any], key: str) -> List[str]:
        # Swagger 2.0: consumes / produces операції перекривають глобальні
        return method_info.get(key) or self.spec.get(key) or [DEFAULT_MEDIA_TYPE]

    def _build_parameter(self, raw: Dict[str, Any]) -> Parameter:
        schema_raw = raw.get('schema')
        if schema_raw is None and 'content' in raw:
            # OpenAPI 3: параметр може описувати схему через content
            first_media = next(iter((raw.get('content') or {}).values()), None) or {}
            schema_raw = first_media.get('schema')
        if schema_raw is None and self.is_swagger2:
            schema_raw = {key: raw[key] for key in SWAGGER2_SCHEMA_KEYS if key in raw} or None

        location = str(raw.get('in', 'query'))
        if location in {item.value for item in ParameterLocation}:
            location = ParameterLocation(location)

        return Parameter(
            name=str(raw.get('name', '')),
            location=location,
            description=_text(raw.get('description')),
            required=bool(raw.get('required', False)),
            schema_node=self._build_schema(schema_raw),
        )

    def _build_operation(self, method: str, method_info: Dict[str, Any]) -> Operation:
        request_body = None
        parameters = []

        for raw_param in method_info.get('parameters') or []:
            raw_param = self._deref(raw_param)
            if not raw_param:
                continue
            if self.is_swagger2 and raw_param.get('in') == 'body':
                # Swagger 2.0: тіло запиту описане як параметр "in: body"
                content = {
                    str(media_type): MediaType(schema_node=self._build_schema(raw_param.get('schema')))
                    for media_type in self._media_types(method_info, 'consumes')
                }
                request_body = RequestBody(description=_text(raw_param.get('description')), content=content)
                continue
            parameters.append(self._build_parameter(raw_param))

        if not self.is_swagger2 and method_info.get('requestBody') is not None:
            request_body_info = self._deref(method_info['requestBody'])
            request_body = RequestBody(
                description=_text(request_body_info.get('description')),
                content=self._build_content(request_body_info.get('content')),
            )

        responses = {}
        for status_code, response_info in (method_info.get('responses') or {}).items():
            response_info = self._deref(response_info)
            if self.is_swagger2:
                content = {}
                if response_info.get('schema') is not None:
                    content = {
                        str(media_type): MediaType(schema_node=self._build_schema(response_info['schema']))
                        for media_type in self._media_types(method_info, 'produces')
                    }
            else:
                content = self._build_content(response_info.get('content'))
            # YAML може прочитати 200 як число
            responses[str(status_code)] = Response(
                description=_text(response_info.get('description')),
                content=content,
            )

        return Operation(
            method=method,
            operation_id=_text(method_info.get('operationId')),
            summary=_text(method_info.get('summary')),
            request_body=request_body,
            responses=responses,
            parameters=parameters,
        )

    def parse_document(self) -> OpenAPIDocument:
        """
        Головний метод, який будує модель усього документа.
        Порядок шляхів, операцій і схем - як у файлі.
        """
        paths = {}
        for path, path_info in (self.spec.get('paths') or {}).items():
            path_info = self._deref(path_info)
            operations = {}
            for method, method_info in path_info.items():
                if str(method).lower() not in HTTP_METHODS or not isinstance(method_info, dict):
                    continue
                operations[str(method).lower()] = self._build_operation(str(method).lower(), method_info)
            paths[str(path)] = PathItem(operations=operations)

        component_schemas = {}
        for name, raw_schema in self.schemas.items():
            schema = self._build_schema(raw_schema)
            if schema is not None:
                component_schemas[str(name)] = schema

        info = self.spec.get('info') or {}
        version = self.spec.get('openapi') or self.spec.get('swagger')
        return OpenAPIDocument(
            source=os.path.abspath(self.filepath),
            version=str(version) if version is not None else None,
            title=_text(info.get('title')),
            paths=paths,
            component_schemas=component_schemas,
        )


def load_document(filepath: str) -> OpenAPIDocument:
    """Прочитати файл і одразу побудувати модель документа."""
    return SpecParser(filepath).parse_document()
