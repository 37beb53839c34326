"""
Model catalog.

Every family is a closed enumeration whose values are the literal model ids
the API expects. Models the catalog does not know yet can be passed as a
CustomModel or a plain string and are forwarded untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class _ModelFamily(str, Enum):
    """Base for catalog enums. The member value is the wire identifier."""

    @property
    def model_name(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class GPT3(_ModelFamily):
    """Models that understand and generate natural language."""

    DAVINCI = "text-davinci-003"  # most capable
    CURIE = "text-curie-001"
    BABBAGE = "text-babbage-001"
    ADA = "text-ada-001"  # fastest, lowest cost


class Codex(_ModelFamily):
    """Models that understand and generate code."""

    DAVINCI = "code-davinci-002"
    CUSHMAN = "code-cushman-001"


class Feature(_ModelFamily):
    """Feature-specific models used by the edits endpoint."""

    DAVINCI = "text-davinci-edit-001"
    CODE_DAVINCI = "code-davinci-edit-001"


class Chat(_ModelFamily):
    """Models served by the chat completions endpoint."""

    CHATGPT = "gpt-3.5-turbo"
    CHATGPT_0301 = "gpt-3.5-turbo-0301"
    GPT4 = "gpt-4"
    GPT4_32K = "gpt-4-32k"


class Embedding(_ModelFamily):
    ADA = "text-embedding-ada-002"


@dataclass(frozen=True)
class CustomModel:
    """A model id outside the catalog, passed through unchanged."""

    name: str

    @property
    def model_name(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


ModelType = Union[GPT3, Codex, Feature, Chat, Embedding, CustomModel, str]


def model_name(model: ModelType) -> str:
    """
    Resolve a model selector to its wire identifier.

    Args:
        model: A catalog member, a CustomModel, or a raw model id string

    Returns:
        The model id exactly as it goes on the wire
    """
    if isinstance(model, (_ModelFamily, CustomModel)):
        return model.model_name
    return model
