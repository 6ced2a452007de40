from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class WrapMode(str, Enum):
    """
    Wrapping mode of a buffer.

    UNSET is the state of a buffer that neither a command nor the heuristic
    has touched yet.
    """
    SOFT = "soft"
    HARD = "hard"
    UNSET = "unset"


class SoftenerOverride(BaseModel):
    """
    A boolean softener: skips the heuristic and forces a mode.

    True forces soft mode, False forces hard mode.
    """
    model_config = ConfigDict(frozen=True)

    value: bool

    @property
    def mode(self) -> WrapMode:
        return WrapMode.SOFT if self.value else WrapMode.HARD


class SoftenerFactor(BaseModel):
    """
    A numeric softener: scales the average line length before it is compared
    with the reference textwidth. Values above 1.0 favour soft mode.
    """
    model_config = ConfigDict(frozen=True)

    value: float


Softener = Union[SoftenerOverride, SoftenerFactor]


class SyntaxCountResult(BaseModel):
    """
    Aggregate size of the regions matched by a syntax query.
    """
    lines: int = Field(default=0, ge=0)
    chars: int = Field(default=0, ge=0)


class LanguageClientInfo(BaseModel):
    """
    A language-intelligence client attached to a buffer, reduced to the
    capabilities the heuristic cares about.
    """
    name: str
    definition_provider: bool = False
    signature_help_provider: bool = False

    @property
    def is_code_intelligence(self) -> bool:
        return self.definition_provider or self.signature_help_provider
