"""Event handlers wiring the panel, the host and the variant generator.

The host dispatches one event at a time: start, selection change, or a UI
message. Each handler runs to completion and never lets an exception escape
into the host.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from src.builders.variants.batch import generate_from_selection
from src.builders.variants.context import BuildContext, make_build_context, ui_size_from_env
from src.builders.variants.diagnostics import DiagnosticsSink, Severity, emit_simple
from src.builders.variants.errors import MalformedRequestError, NoEligibleSelectionError
from src.builders.variants.layout import DEFAULT_LAYOUT, VariantLayout
from src.builders.variants.plan_types import BatchResult
from src.builders.variants.scene_types import HostScene
from src.builders.variants.selection import report_selection_status
from src.schema import GenerateRequest, SelectionStatus

NO_SELECTION_MESSAGE = "❌ Please select at least one valid icon"


def _validation_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}" if location else message


class VariantPlugin:
    def __init__(
        self,
        host: HostScene,
        *,
        layout: VariantLayout = DEFAULT_LAYOUT,
        diag: Optional[DiagnosticsSink] = None,
    ) -> None:
        self.host = host
        self.layout = layout
        self._diag = diag

    def _context(self) -> BuildContext:
        return make_build_context(self._diag)

    def start(self) -> SelectionStatus:
        width, height = ui_size_from_env()
        self.host.show_ui(width, height)
        return self.on_selection_change()

    def on_selection_change(self) -> SelectionStatus:
        return report_selection_status(self.host, self.host.current_selection(), ctx=self._context())

    def on_message(self, message: Any) -> Optional[BatchResult]:
        ctx = self._context()
        message_type = message.get("type") if isinstance(message, dict) else None
        if message_type != "generate":
            emit_simple(
                ctx.diag,
                run_id=ctx.run_id,
                stage="request",
                component="plugin",
                code="MESSAGE_IGNORED",
                severity=Severity.WARN,
                path="type",
                source="request",
                input_value=message_type,
                reason="unsupported UI message type",
            )
            return None
        return self._handle_generate(message, ctx)

    def _reject(self, ctx: BuildContext, reason: str, payload: Any) -> None:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="request",
            component="plugin",
            code="REQUEST_REJECTED",
            severity=Severity.ERROR,
            source="request",
            input_value=payload,
            reason=reason,
        )
        self.host.notify(f"❌ Invalid request: {reason}", error=True)

    def _handle_generate(self, message: dict, ctx: BuildContext) -> Optional[BatchResult]:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="request",
            component="plugin",
            code="REQUEST_RECEIVED",
            severity=Severity.INFO,
            source="request",
            input_value=message,
        )
        try:
            plan = GenerateRequest.model_validate(message).to_plan()
        except ValidationError as exc:
            self._reject(ctx, _validation_message(exc), message)
            return None
        except MalformedRequestError as exc:
            self._reject(ctx, str(exc), message)
            return None

        try:
            result = generate_from_selection(
                self.host,
                self.host.current_selection(),
                plan,
                layout=self.layout,
                ctx=ctx,
            )
        except NoEligibleSelectionError:
            self.host.notify(NO_SELECTION_MESSAGE)
            return None
        except Exception as exc:
            emit_simple(
                ctx.diag,
                run_id=ctx.run_id,
                stage="finalize",
                component="plugin",
                code="REQUEST_FAILED",
                severity=Severity.FATAL,
                source="host",
                reason=str(exc) or type(exc).__name__,
                meta={"exception": type(exc).__name__},
            )
            self.host.notify(f"Generation failed: {exc}", error=True)
            self.host.close()
            return None

        self.host.close()
        return result
