from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class QueryResult:
    """Uniform outcome of a forwarded operation: one text block plus an error flag."""

    is_error: bool
    text: str

    @classmethod
    def success(cls, text: str) -> "QueryResult":
        return cls(is_error=False, text=text)

    @classmethod
    def error(cls, text: str) -> "QueryResult":
        return cls(is_error=True, text=text)


class ArgumentDescriptor(BaseModel):
    name: str
    type: str = Field(..., description="Printed type reference, e.g. 'ID!'")
    description: Optional[str] = None


class InputFieldDescriptor(BaseModel):
    type: str
    description: Optional[str] = None


class FieldDescriptor(BaseModel):
    type: str
    description: Optional[str] = None
    args: List[ArgumentDescriptor] = Field(default_factory=list)


class EnumValueDescriptor(BaseModel):
    name: str
    description: Optional[str] = None


class ObjectTypeDescriptor(BaseModel):
    kind: Literal["OBJECT"] = "OBJECT"
    description: Optional[str] = None
    fields: Dict[str, FieldDescriptor] = Field(default_factory=dict)


class InterfaceTypeDescriptor(BaseModel):
    kind: Literal["INTERFACE"] = "INTERFACE"
    description: Optional[str] = None
    fields: Dict[str, FieldDescriptor] = Field(default_factory=dict)


class UnionTypeDescriptor(BaseModel):
    kind: Literal["UNION"] = "UNION"
    description: Optional[str] = None
    possibleTypes: List[str] = Field(default_factory=list)


class EnumTypeDescriptor(BaseModel):
    kind: Literal["ENUM"] = "ENUM"
    description: Optional[str] = None
    values: List[EnumValueDescriptor] = Field(default_factory=list)


class InputObjectTypeDescriptor(BaseModel):
    kind: Literal["INPUT_OBJECT"] = "INPUT_OBJECT"
    description: Optional[str] = None
    fields: Dict[str, InputFieldDescriptor] = Field(default_factory=dict)


class ScalarTypeDescriptor(BaseModel):
    kind: Literal["SCALAR"] = "SCALAR"
    description: Optional[str] = None


TypeDescriptor = Annotated[
    Union[
        ObjectTypeDescriptor,
        InterfaceTypeDescriptor,
        UnionTypeDescriptor,
        EnumTypeDescriptor,
        InputObjectTypeDescriptor,
        ScalarTypeDescriptor,
    ],
    Field(discriminator="kind"),
]
