"""ProjectionService: read-only views over the status graph and routing table.

Nothing here touches the store; results are derived from the domain
functions alone.
"""

from __future__ import annotations

from cashrun.domain.delivery import (
    delivery_style_chip_label,
    delivery_style_hint,
    delivery_style_instruction,
    delivery_style_label,
    resolve_delivery_style,
)
from cashrun.domain.lifecycle import all_edges, describe_transition, parse_status
from cashrun.domain.projections import customer_facing_status, project_status
from cashrun.domain.reveal import (
    blur_runner_avatar,
    can_customer_cancel,
    live_location_gate,
    reveal_message,
    runner_visible,
)
from cashrun.domain.routing import resolve_route
from cashrun.services.result import ServiceError, ServiceResult


class ProjectionService:
    def transition_graph(self) -> ServiceResult:
        edges = [
            {
                "from_status": str(src),
                "to_status": str(dst),
                "description": describe_transition(src, dst),
            }
            for src, dst in all_edges()
        ]
        return ServiceResult(ok=True, op="transition_graph", data={"edges": edges})

    def project(self, status: str, *, delivery_style: str | None = None) -> ServiceResult:
        """Every projection for one status.

        Unknown statuses still project (to the safe defaults) but carry a warning.
        """
        parsed = parse_status(status)
        warnings: list[str] = []
        if parsed is None:
            warnings.append(f"Unknown status {status!r}; showing safe defaults")
        subject = parsed if parsed is not None else status

        data = project_status(subject)
        customer = customer_facing_status(subject)
        style = resolve_delivery_style(delivery_style)
        data.update(
            {
                "label": customer.label,
                "description": customer.description,
                "runner_visible": runner_visible(subject),
                "avatar_blurred": blur_runner_avatar(subject),
                "live_location": live_location_gate(subject),
                "customer_can_cancel": can_customer_cancel(subject),
                "reveal_message": reveal_message(subject),
                "delivery_style": str(style),
                "delivery_label": delivery_style_label(style),
                "delivery_hint": delivery_style_hint(style),
                "delivery_chip": delivery_style_chip_label(style),
                "handoff_instruction": delivery_style_instruction(style),
            }
        )
        return ServiceResult(ok=True, op="project_status", data=data, warnings=warnings)

    def route(
        self,
        role: str | None,
        current_path: str,
        *,
        profile_complete: bool = True,
        authenticated: bool = True,
    ) -> ServiceResult:
        op = "resolve_route"
        if not current_path.startswith("/"):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="INVALID_INPUT", message="Path must start with '/'"),
            )
        target = resolve_route(
            role,
            profile_complete,
            current_path,
            authenticated=authenticated,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": current_path, "redirect": target, "stay": target is None},
        )
