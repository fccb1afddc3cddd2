import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from cloudsentiment.exceptions import InputValidationError

logger = logging.getLogger(__name__)


class ProviderName(str, Enum):
    # Порядок членов = порядок ключей в result.json
    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"
    IBM = "ibm"


class InputDocument(BaseModel):
    language: str = Field(
        ...,
        description="Language code understood by every provider",
        examples=["en"]
    )
    sentences: List[str] = Field(
        ...,
        min_length=1,
        description="Sentences to analyze, in report order",
        examples=[["I love this product.", "The delivery was late."]]
    )

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, language):
        if not isinstance(language, str):
            raise ValueError("Language must be a string")

        language = language.strip()
        if not language:
            raise ValueError("Language must not be empty")
        return language

    @field_validator("sentences")
    @classmethod
    def validate_sentences(cls, sentences):
        for index, sentence in enumerate(sentences):
            if not sentence.strip():
                raise ValueError(f"Sentence #{index} is empty")
        return sentences


class ProviderResult(BaseModel):
    """Raw answer of one provider: one entry per input sentence, in sentence order."""

    provider: ProviderName
    items: List[Dict[str, Any]]


def load_input(path: Union[str, Path]) -> InputDocument:
    """
    Read and validate the input document.

    Raises InputValidationError with a message aimed at the person editing the
    file; nothing is sent to any provider before this returns.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InputValidationError(f'Input file "{path}" not found')
    except UnicodeDecodeError as e:
        raise InputValidationError(f'Input file "{path}" is not valid UTF-8: {e}')
    except OSError as e:
        raise InputValidationError(f'Cannot read input file "{path}": {e.strerror or e}')
    except json.JSONDecodeError as e:
        raise InputValidationError(f'Input file "{path}" is not valid JSON: {e}')

    if not isinstance(raw, dict):
        raise InputValidationError(f'Input file "{path}" must contain a JSON object')

    try:
        document = InputDocument.model_validate(raw)
    except ValidationError as e:
        logger.debug("Input validation failed: %s", e.errors())
        fields = {error["loc"][0] for error in e.errors() if error["loc"]}
        if "language" in fields:
            raise InputValidationError(
                f'Language not defined. Please add the language code in "{path}"'
            )
        raise InputValidationError(
            f'Invalid sentences array. Please provide a correct array of sentences in "{path}"'
        )

    logger.info("Loaded %d sentences (language=%s) from %s",
                len(document.sentences), document.language, path)
    return document
