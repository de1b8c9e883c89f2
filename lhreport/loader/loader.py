"""Result loader for parsing and validating LHR JSON."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from lhreport.core.exceptions import ParseError, ValidationError
from lhreport.protocol.models import LighthouseResult


class ResultLoader:
    """Load and validate audit run results from JSON."""

    def load_file(self, file_path: str | Path) -> LighthouseResult:
        """Load a result from a JSON file.

        Args:
            file_path: Path to the LHR JSON file

        Returns:
            Validated LighthouseResult

        Raises:
            ParseError: If the file cannot be read or is not valid JSON
            ValidationError: If the data does not match the contract
        """
        file_path = Path(file_path)
        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ParseError(f"Cannot read {file_path}: {e}") from e

        return self._process_data(self._parse(content, str(file_path)), str(file_path))

    def load_string(self, content: str) -> LighthouseResult:
        """Load a result from a JSON string.

        Raises:
            ParseError: If the content is not valid JSON
            ValidationError: If the data does not match the contract
        """
        return self._process_data(self._parse(content, None), None)

    def load_dict(self, data: dict[str, Any]) -> LighthouseResult:
        """Validate an already decoded result.

        Raises:
            ValidationError: If the data does not match the contract
        """
        return self._process_data(data, None)

    def _parse(self, content: str, file_path: str | None) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            location = f"{file_path}: " if file_path else ""
            raise ParseError(
                f"{location}Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e

    def _process_data(self, data: Any, file_path: str | None) -> LighthouseResult:
        """Build the pydantic model, converting its errors to ours.

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a JSON object, got {type(data).__name__}",
                file_path=file_path,
            )

        try:
            return LighthouseResult.model_validate(data)
        except PydanticValidationError as e:
            errors = []
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                errors.append(f"{loc}: {error['msg']}")

            error_msg = "Result validation failed:\n  " + "\n  ".join(errors)
            raise ValidationError(error_msg, file_path=file_path) from e
