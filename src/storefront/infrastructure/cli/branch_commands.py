"""CLI commands for the Branch aggregate."""

from __future__ import annotations

import click

from storefront.application.assign_staff import AssignStaffHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import build_container


@click.command("assign-staff")
@click.option("--branch", "branch_id", required=True, help="Branch ID.")
@click.option("--user", "user_id", required=True, help="Staff member's user ID.")
def branch_assign_staff(branch_id: str, user_id: str) -> None:
    """Add a staff member to a branch roster."""
    container = build_container()
    handler = AssignStaffHandler(container.branches, container.users)

    try:
        branch = handler.handle(branch_id, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Branch '{branch.name}' now has {len(branch.staffs)} staff member(s).")
