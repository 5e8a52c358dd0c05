# Цей файл знаходиться в: inspector/walker.py
"""
Модуль 2: Обхідник документа.
Проходить по всіх шляхах і операціях, друкує дерево документа
та збирає карту використання схем (SchemaUsage).
Індекс схем і список використань передаються явно.
"""

import json
from typing import Dict, List, Optional, Union

from inspector.models import (
    MediaType,
    OpenAPIDocument,
    Operation,
    ParameterLocation,
    SchemaNode,
    SchemaUsage,
    UsageKind,
)
from inspector.report import ReportLog, indent
from inspector.resolver import resolve_schema_identity, resolve_type_name


def _text(value: Optional[str]) -> str:
    return "" if value is None else str(value)


def _location_label(location: Union[ParameterLocation, str]) -> str:
    # query -> Query, formData -> FormData
    value = location.value if isinstance(location, ParameterLocation) else str(location)
    return value[:1].upper() + value[1:]


def print_schema(schema: Optional[SchemaNode], type_name: Optional[str], level: int, report: ReportLog) -> None:
    """Друкує ім'я типу (якщо знайдено) і розіменовану схему як JSON."""
    if type_name:
        report.log(f"{indent(level)}Type Name: {type_name}")
    if schema is None:
        return
    pretty = json.dumps(schema.actual.body, indent=2, ensure_ascii=False, default=str)
    for line in pretty.split('\n'):
        report.log(f"{indent(level)}{line}")


def _walk_content(content: Dict[str, MediaType],
                  level: int,
                  index: Dict[str, str],
                  usages: List[SchemaUsage],
                  report: ReportLog,
                  **usage_fields) -> None:
    for content_type, media in content.items():
        report.log(f"{indent(level)}Content Type: {content_type}")
        identity = resolve_schema_identity(media.schema_node, index)
        print_schema(media.schema_node, resolve_type_name(media.schema_node, index), level + 1, report)
        usages.append(SchemaUsage(
            schema_name=identity.name,
            ref_path=identity.ref_path,
            **usage_fields,
        ))


def walk_operation(path: str,
                   operation: Operation,
                   level: int,
                   index: Dict[str, str],
                   usages: List[SchemaUsage],
                   report: ReportLog) -> None:
    report.log(f"{indent(level)}Operation: {_text(operation.operation_id)} - {_text(operation.summary)}")

    # --- Тіло запиту ---
    if operation.request_body is not None:
        report.log(f"{indent(level + 1)}Request Body:")
        _walk_content(operation.request_body.content, level + 2, index, usages, report,
                      usage_kind=UsageKind.REQUEST,
                      operation_id=operation.operation_id,
                      path=path)

    # --- Відповіді ---
    report.log(f"{indent(level + 1)}Responses:")
    for status_code, response in operation.responses.items():
        report.log(f"{indent(level + 2)}{status_code}: {_text(response.description)}")
        _walk_content(response.content, level + 3, index, usages, report,
                      usage_kind=UsageKind.RESPONSE,
                      operation_id=operation.operation_id,
                      path=path,
                      status_code=status_code)

    # --- Параметри ---
    report.log(f"{indent(level + 1)}Parameters:")
    for parameter in operation.parameters:
        schema_type = parameter.schema_node.actual.type if parameter.schema_node is not None else None
        report.log(
            f"{indent(level + 2)}{_location_label(parameter.location)}"
            f" - {_text(schema_type)} - {parameter.name} - {_text(parameter.description)}"
        )
        # Один запис на параметр, незалежно від content
        identity = resolve_schema_identity(parameter.schema_node, index)
        usages.append(SchemaUsage(
            schema_name=identity.name,
            ref_path=identity.ref_path,
            usage_kind=UsageKind.PARAMETER,
            operation_id=operation.operation_id,
            path=path,
            parameter_name=parameter.name,
        ))


def walk_document(document: OpenAPIDocument,
                  index: Dict[str, str],
                  usages: List[SchemaUsage],
                  report: ReportLog) -> List[SchemaUsage]:
    """
    Головний метод обходу. Порядок: шляхи, операції, тіло запиту,
    відповіді, параметри - все як оголошено в документі.
    Повертає той самий список usages, доповнений новими записами.
    """
    for path, path_item in document.paths.items():
        report.log(f"{indent(1)}Path: {path}")
        for operation in path_item.operations.values():
            walk_operation(path, operation, 2, index, usages, report)
    return usages
