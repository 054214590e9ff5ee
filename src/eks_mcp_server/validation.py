"""Structural validation of tool call arguments."""

from typing import Any, Optional

from pydantic import ValidationError

from eks_mcp_server.errors import ArgumentValidationError
from eks_mcp_server.logging_utils import get_logger
from eks_mcp_server.models import ToolArguments
from eks_mcp_server.tools import ToolDescriptor

logger = get_logger("validation")


def _describe_errors(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


def validate_arguments(tool: ToolDescriptor, raw_arguments: Optional[Any]) -> ToolArguments:
    """Validate raw call arguments against a tool's argument model.

    Only types and presence are checked. Values such as ARNs, subnet IDs or
    regions are passed through for the control plane to judge.

    Args:
        tool: The catalogue entry being called.
        raw_arguments: The arguments object from the request; ``None`` means no arguments.

    Returns:
        The validated arguments model.

    Raises:
        ArgumentValidationError: If the arguments do not match the tool's shape.
    """
    if raw_arguments is None:
        raw_arguments = {}
    if not isinstance(raw_arguments, dict):
        raise ArgumentValidationError(
            tool.name, f"Invalid arguments for {tool.name}: arguments must be an object"
        )

    try:
        return tool.arguments_model.model_validate(raw_arguments)
    except ValidationError as e:
        detail = _describe_errors(e)
        logger.debug(f"Rejected arguments for {tool.name}: {detail}")
        raise ArgumentValidationError(
            tool.name, f"Invalid arguments for {tool.name}: {detail}", {"errors": detail}
        ) from e
