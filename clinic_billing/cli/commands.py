"""CLI commands for Clinic Billing."""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from clinic_billing.config import get_settings

app = typer.Typer(
    name="clinic-billing",
    help="Clinic appointment lifecycle and billing service",
    add_completion=False,
)
console = Console()


def get_calculator():
    """Build a billing calculator from the configured rates."""
    from clinic_billing.billing import BillingCalculator, default_fee_schedule

    settings = get_settings()
    return BillingCalculator(fee_schedule=default_fee_schedule(), rates=settings.billing_rates)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
):
    """Start the REST API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"Starting Clinic Billing API server on {host}:{port}")
    uvicorn.run(
        "clinic_billing.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command("fee-table")
def fee_table():
    """Show the base fee for every specialty and experience bracket."""
    from clinic_billing.billing import ExperienceBracket

    calculator = get_calculator()
    schedule = calculator.fee_schedule

    table = Table(title="Base Fee Table")
    table.add_column("Specialty", style="cyan")
    table.add_column("0-19 yrs", justify="right")
    table.add_column("20-30 yrs", justify="right")
    table.add_column("31+ yrs", justify="right")

    for specialty in schedule.specialties:
        strategy = schedule.strategy_for(specialty)
        table.add_row(
            specialty,
            *(str(strategy.fee_for(bracket)) for bracket in ExperienceBracket),
        )

    console.print(table)


@app.command()
def quote(
    specialty: str = typer.Argument(..., help="Doctor specialty, e.g. ORTHO or CARDIO"),
    years: int = typer.Option(..., "--years", "-y", min=0, help="Doctor's years of experience"),
    prior: int = typer.Option(0, "--prior", "-p", min=0, help="Patient's prior completed visits"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Calculate a bill breakdown without recording anything."""
    from clinic_billing.billing import UnknownSpecialtyError

    calculator = get_calculator()
    try:
        breakdown = calculator.calculate(specialty.upper(), years, prior)
    except UnknownSpecialtyError:
        known = ", ".join(calculator.fee_schedule.specialties)
        console.print(f"[red]Unknown specialty: {specialty}. Use one of: {known}[/red]")
        raise typer.Exit(1)

    if output_json:
        console.print_json(json.dumps(breakdown.model_dump(mode="json")))
        return

    table = Table(show_header=False, box=None)
    table.add_column("Item")
    table.add_column("Amount", justify="right")
    table.add_row("Base fee", str(breakdown.base_fee))
    table.add_row(f"Discount ({breakdown.discount_percent}%)", f"-{breakdown.discount_amount}")
    table.add_row("Discounted", str(breakdown.discounted_amount))
    table.add_row("GST", str(breakdown.gst_amount))
    table.add_row("[bold]Total[/bold]", f"[bold]{breakdown.total_amount}[/bold]")
    table.add_row("Insurance", str(breakdown.insurance_amount))
    table.add_row("Co-pay", str(breakdown.co_pay_amount))

    console.print(
        Panel(
            table,
            title=f"{breakdown.specialty} / {breakdown.bracket.value} ({breakdown.experience_years} yrs)",
            border_style="blue",
        )
    )


@app.command("audit-stats")
def audit_stats():
    """Show statistics from the audit trail."""
    from clinic_billing.observability import AuditLogger

    settings = get_settings()
    audit = AuditLogger(log_dir=settings.audit_log_dir, enabled=settings.audit_enabled)

    table = Table(title="Audit Trail")
    table.add_column("Log")
    table.add_column("Events", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Avg ms", justify="right")

    for log_type in ("bills", "appointments"):
        stats = audit.get_stats(log_type)
        table.add_row(
            log_type,
            str(stats["total"]),
            str(stats.get("errors", 0)),
            f"{stats.get('avg_duration_ms', 0):.1f}",
        )

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from clinic_billing import __version__

    console.print(f"Clinic Billing v{__version__}")
