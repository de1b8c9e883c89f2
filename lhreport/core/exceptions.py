"""lhreport exceptions."""


class LHReportError(Exception):
    """Base exception for all lhreport errors."""


class LoaderError(LHReportError):
    """Base exception for loader errors."""


class ValidationError(LoaderError):
    """Result data does not match the data contract."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        file_path: str | None = None,
    ):
        self.message = message
        self.field = field
        self.file_path = file_path

        location_parts = []
        if file_path:
            location_parts.append(f"File: {file_path}")
        if field:
            location_parts.append(f"Field: {field}")

        if location_parts:
            full_message = f"{', '.join(location_parts)}: {message}"
        else:
            full_message = message

        super().__init__(full_message)


class ParseError(LoaderError):
    """JSON parsing error."""


class IntegrityError(LHReportError):
    """Base exception for broken references inside a result graph."""


class DanglingReferenceError(IntegrityError):
    """An audit ref points at an audit or group that does not exist."""

    def __init__(self, kind: str, ref_id: str, category_id: str) -> None:
        self.kind = kind
        self.ref_id = ref_id
        self.category_id = category_id
        super().__init__(
            f"Category '{category_id}' references unknown {kind} '{ref_id}'"
        )


class UnknownDisplayModeError(LHReportError):
    """Raised when the classifier meets a score display mode it cannot place."""

    def __init__(self, mode: str, audit_id: str) -> None:
        self.mode = mode
        self.audit_id = audit_id
        super().__init__(
            f"No clump rule for score display mode '{mode}' (audit '{audit_id}')"
        )
