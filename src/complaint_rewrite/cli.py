"""
complaint-rewrite CLI - offline tooling around the rewrite pipeline.

Commands:
    complaint-rewrite eval <outputs.jsonl>         Replay provider outputs against eval fixtures
    complaint-rewrite build-batch <jobs.jsonl>     Build a provider batch request file
    complaint-rewrite extract <batch_output.jsonl> Pull rewritten text out of a batch output file
    complaint-rewrite version                      Show version

Machine-readable output (JSONL) goes to stdout; diagnostics and summaries go
to stderr so the report stream stays clean.
"""

import json
import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import HarnessConfig, RewriteConfig
from .errors import ComplaintRewriteError
from .harness import FixtureRunner, load_provider_outputs
from .models import RewriteInput
from .provider import assemble_batch_file, build_batch_job_line, iter_batch_output, resolve_routing

app = typer.Typer(help="Complaint rewrite batch and evaluation tooling")
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_text(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ComplaintRewriteError(f"Cannot read {what} {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ComplaintRewriteError(f"Cannot read {what} {path}: not valid UTF-8 ({e.reason})") from e


def _fail(error: ComplaintRewriteError) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


# =============================================================================
# EVAL
# =============================================================================


@app.command("eval")
def eval_fixtures(
    outputs: Path = typer.Argument(..., help="Provider outputs JSONL ({case_id, rewritten_text, output_language})"),
    fixtures_dir: Path = typer.Option(None, help="Fixture directory (default: COMPLAINT_REWRITE_FIXTURES_DIR)"),
    judge_version: str = typer.Option(None, help="Judge version label for results"),
    dataset_version: str = typer.Option(None, help="Dataset version label for results"),
):
    """Evaluate provider outputs against the eval fixtures and print a JSONL report."""
    config = HarnessConfig.from_env()
    _configure_logging(config.log_level)

    try:
        runner = FixtureRunner.from_directory(
            fixtures_dir or config.fixtures_dir,
            judge_version=judge_version or config.judge_version,
            dataset_version=dataset_version or config.dataset_version,
        )
        report = runner.run(load_provider_outputs(outputs))
    except ComplaintRewriteError as e:
        _fail(e)

    for line in report.to_jsonl_lines():
        typer.echo(line)

    for case_id in report.unknown_case_ids:
        err_console.print(f"Unknown case_id {case_id}", markup=False, highlight=False)

    table = Table(title="Fixture Report")
    table.add_column("Case", style="bold")
    table.add_column("Status")
    table.add_column("Violations")
    for result in report.results:
        status = "[green]MATCHED[/green]" if result.matched_expected else "[red]MISSED[/red]"
        detail = ", ".join(result.eval_result.violations) or "-"
        if result.missing_violations:
            detail += f" (missing: {', '.join(result.missing_violations)})"
        table.add_row(result.case_id, status, detail)
    err_console.print(table)
    err_console.print(
        f"{report.matched}/{len(report.results)} case(s) matched expected violations, "
        f"{len(report.unknown_case_ids)} unknown case id(s)"
    )


# =============================================================================
# BUILD BATCH
# =============================================================================


class _RewriteRequestSpec(BaseModel):
    intent: str
    original_text: str
    context_pack: Any = None
    policy: Any = None


class JobSpec(BaseModel):
    """One queued rewrite job, as exported by the job system."""

    job_id: str
    target_locale: str
    rewrite_request: _RewriteRequestSpec
    routing_decision: dict[str, Any] | None = None


def _parse_job_specs(text: str, path: Path) -> list[JobSpec]:
    specs = []
    for line_no, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            specs.append(JobSpec.model_validate_json(line))
        except ValidationError as e:
            raise ComplaintRewriteError(f"Invalid job at {path}:{line_no}: {e}") from e
    return specs


@app.command("build-batch")
def build_batch(
    jobs: Path = typer.Argument(..., help="Jobs JSONL ({job_id, target_locale, rewrite_request, routing_decision?})"),
):
    """Build the provider batch request JSONL for a set of rewrite jobs."""
    _configure_logging(HarnessConfig.from_env().log_level)
    rewrite_config = RewriteConfig.from_env()

    try:
        specs = _parse_job_specs(_read_text(jobs, "jobs file"), jobs)
    except ComplaintRewriteError as e:
        _fail(e)

    entries = []
    unsupported = []
    for spec in specs:
        supported, model, prompt_version = resolve_routing(spec.routing_decision)
        if not supported:
            unsupported.append(spec.job_id)
            continue
        rr = spec.rewrite_request
        record = build_batch_job_line(
            spec.job_id,
            RewriteInput(
                model=model,
                prompt_version=prompt_version,
                target_locale=spec.target_locale,
                intent=rr.intent,
                original_text=rr.original_text,
                context_pack=rr.context_pack,
                policy=rr.policy,
                routing_decision=spec.routing_decision,
            ),
            rewrite_config,
        )
        entries.append((spec.job_id, record))

    batch = assemble_batch_file(entries)
    for line in batch.lines:
        typer.echo(line)

    for job_id in unsupported:
        err_console.print(f"{job_id}: batch_provider_not_supported", markup=False, highlight=False)
    for skipped in batch.skipped + batch.deferred:
        err_console.print(f"{skipped.job_id}: {skipped.reason}", markup=False, highlight=False)
    err_console.print(
        f"{len(batch.lines)} line(s), {batch.total_bytes} bytes; "
        f"{len(unsupported) + len(batch.skipped)} skipped, {len(batch.deferred)} deferred"
    )


# =============================================================================
# EXTRACT
# =============================================================================


@app.command()
def extract(
    batch_output: Path = typer.Argument(..., help="Provider batch output JSONL"),
):
    """Print {custom_id, rewritten_text, error} for every provider output line."""
    _configure_logging(HarnessConfig.from_env().log_level)

    try:
        text = _read_text(batch_output, "batch output")
    except ComplaintRewriteError as e:
        _fail(e)

    extracted = 0
    rejected = 0
    for item, error in iter_batch_output(text):
        if error is not None:
            rejected += 1
            err_console.print(f"Rejected line: {error.reason}", markup=False, highlight=False)
            continue
        rewritten = item.rewritten_text
        if rewritten:
            extracted += 1
        typer.echo(json.dumps({
            "custom_id": item.custom_id,
            "rewritten_text": rewritten,
            "error": item.error_summary or (None if rewritten else "empty_rewrite"),
        }, ensure_ascii=False))

    err_console.print(f"{extracted} rewrite(s) extracted, {rejected} line(s) rejected")


# =============================================================================
# VERSION
# =============================================================================


@app.command()
def version():
    """Show complaint-rewrite version."""
    from . import __version__
    typer.echo(f"complaint-rewrite v{__version__}")


if __name__ == "__main__":
    app()
