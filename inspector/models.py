# Цей файл знаходиться в: inspector/models.py

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SchemaKind(str, Enum):
    REFERENCE = "reference"
    ARRAY = "array"
    OBJECT = "object"
    PRIMITIVE = "primitive"


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    FORM_DATA = "formData"  # тільки Swagger 2.0


class UsageKind(str, Enum):
    REQUEST = "request"
    RESPONSE = "response"
    PARAMETER = "parameter"


class SchemaNode(BaseModel):
    """
    Одна схема з документа у вигляді "тегованого варіанту":
    посилання, масив, об'єкт або примітив.
    `body` - схема рівно так, як її оголошено у файлі.
    """
    kind: SchemaKind
    body: Dict[str, Any] = Field(default_factory=dict)
    title: Optional[str] = None
    type: Optional[str] = None

    # Тільки для REFERENCE
    ref: Optional[str] = None
    ref_title: Optional[str] = None
    target: Optional["SchemaNode"] = None

    # Тільки для ARRAY
    items: Optional["SchemaNode"] = None

    @property
    def is_reference(self) -> bool:
        return self.kind == SchemaKind.REFERENCE

    @property
    def is_array(self) -> bool:
        return self.kind == SchemaKind.ARRAY

    @property
    def is_resolved(self) -> bool:
        """Чи вдалося знайти схему, на яку вказує $ref."""
        return not self.is_reference or self.target is not None

    @property
    def actual(self) -> "SchemaNode":
        """Розіменована схема (для посилання - ціль, інакше - сама схема)."""
        if self.is_reference and self.target is not None:
            return self.target
        return self


class MediaType(BaseModel):
    schema_node: Optional[SchemaNode] = None


class RequestBody(BaseModel):
    description: Optional[str] = None
    content: Dict[str, MediaType] = Field(default_factory=dict)


class Response(BaseModel):
    description: Optional[str] = None
    content: Dict[str, MediaType] = Field(default_factory=dict)


class Parameter(BaseModel):
    name: str
    # Невідоме значення "in" зберігається як є
    location: Union[ParameterLocation, str]
    description: Optional[str] = None
    required: bool = False
    schema_node: Optional[SchemaNode] = None


class Operation(BaseModel):
    method: str
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    request_body: Optional[RequestBody] = None
    responses: Dict[str, Response] = Field(default_factory=dict)
    parameters: List[Parameter] = Field(default_factory=list)


class PathItem(BaseModel):
    operations: Dict[str, Operation] = Field(default_factory=dict)


class OpenAPIDocument(BaseModel):
    source: str
    version: Optional[str] = None
    title: Optional[str] = None
    paths: Dict[str, PathItem] = Field(default_factory=dict)
    component_schemas: Dict[str, SchemaNode] = Field(default_factory=dict)


class SchemaUsage(BaseModel):
    """Один запис карти використання схем. Після створення не змінюється."""
    model_config = ConfigDict(frozen=True)

    schema_name: Optional[str] = None
    ref_path: Optional[str] = None
    usage_kind: UsageKind
    operation_id: Optional[str] = None
    path: str
    parameter_name: Optional[str] = None
    status_code: Optional[str] = None
