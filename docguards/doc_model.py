"""Documentation model: a documented member and its comment tags."""
from typing import List

from pydantic import BaseModel


class DocParameter(BaseModel):
    name: str
    type: str


class ParamTag(BaseModel):
    parameter: str
    comment: str = ''


class ThrowsTag(BaseModel):
    exception: str
    comment: str = ''


class DocumentedMember(BaseModel):
    """A method or constructor together with its documentation comment.

    ``containing_type`` is the qualified name of the declaring type, and
    ``parameters`` follow source order (no compiler-synthesized ones).
    """
    name: str
    containing_type: str
    parameters: List[DocParameter] = []
    is_constructor: bool = False
    comment: str = ''
    param_tags: List[ParamTag] = []
    throws_tags: List[ThrowsTag] = []

    def parameter_types(self) -> List[str]:
        return [p.type for p in self.parameters]

    def param_tags_for(self, parameter_name: str) -> List[ParamTag]:
        return [t for t in self.param_tags if t.parameter == parameter_name]

    def signature(self) -> str:
        params = ', '.join(f"{p.type} {p.name}" for p in self.parameters)
        return f"{self.containing_type}.{self.name}({params})"
