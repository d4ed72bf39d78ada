"""Custom exceptions for rladmin status parsing."""

from typing import Optional


class RLAdminBaseError(Exception):
    """Base exception for rladmin parsing errors."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize rladmin error.

        Args:
            message: Error message in Chinese
            suggestion: Suggested solution in Chinese
            original_error: Original exception for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self) -> str:
        """Format error message."""
        msg = self.message
        if self.suggestion:
            msg += f"\n建議：{self.suggestion}"
        return msg


class TimestampNotFoundError(RLAdminBaseError):
    """Exception raised when the report has no timestamp line."""

    def __init__(self):
        message = "rladmin 輸出中找不到時間戳記"
        suggestion = "請確認輸入的第一行為 'YYYY-MM-DD hh:mm:ss.ffffff±hh:mm' 格式的時間"
        super().__init__(message, suggestion)


class CoercionError(RLAdminBaseError, ValueError):
    """Exception raised when a single text token cannot be converted."""

    def __init__(
        self,
        kind: str,
        token: str,
        reason: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize coercion error.

        Args:
            kind: Kind of value being parsed (e.g. "memory size")
            token: Offending text token
            reason: Optional extra detail
            original_error: Original exception
        """
        self.kind = kind
        self.token = token
        message = f"無法將 '{token}' 解析為 {kind}"
        if reason:
            message += f": {reason}"
        super().__init__(message, None, original_error)


class FieldDecodeError(RLAdminBaseError):
    """Exception raised when a fixed-width field fails to decode."""

    def __init__(
        self,
        field: str,
        value: str,
        type_name: str,
        line_number: int,
        original_error: Optional[Exception] = None
    ):
        """Initialize field decode error.

        Args:
            field: Destination field name
            value: Raw field text
            type_name: Destination type name
            line_number: 1-based line number within the section
            original_error: Original exception
        """
        self.field = field
        self.value = value
        self.type_name = type_name
        self.line_number = line_number
        message = (
            f"欄位解析錯誤：第 {line_number} 行的 {field} = '{value}' "
            f"無法轉換為 {type_name}"
        )
        if original_error is not None:
            message += f" ({original_error})"
        suggestion = "請確認 rladmin status 輸出完整且未經修改"
        super().__init__(message, suggestion, original_error)
