import math
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..chunking.engine import chunk_text, compute_budget, overlap_chars_for
from ..chunking.estimate import CleanMode, analyze_text
from ..core import artifacts
from ..core.config import SETTINGS, Settings
from ..core.errors import ChatToolsError
from ..core.logging import log, resolve_log_format, setup_logging
from ..core.registry import ModelRegistry

app = typer.Typer(add_completion=False, help="Chat Token Tools CLI")


def _parse_int(value: str | None, default: int) -> int:
    """Lenient int parsing: malformed input falls back to the default."""
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_float(value: str | None, default: float) -> float:
    """Lenient float parsing; nan and inf count as malformed."""
    if value is None:
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) else default


def _console(settings: Settings) -> Console:
    return Console(
        color_system=None if settings.NO_COLOR else "auto",
        no_color=settings.NO_COLOR,
        highlight=False,
        markup=False,
    )


def _load_settings(ctx: typer.Context, config_file: str | None) -> Settings:
    try:
        settings = Settings.load_config(config_file)
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e

    # Config file / env format applies unless --log-format was given
    override = (ctx.obj or {}).get("log_format")
    setup_logging(resolve_log_format(settings.LOG_FORMAT, override))
    log.info("config.loaded", config_file=config_file or "auto-discovered")
    return settings


@app.callback()
def _init(
    ctx: typer.Context,
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log format: json|plain|auto"
    ),
) -> None:
    ctx.obj = {"log_format": log_format}
    setup_logging(resolve_log_format(SETTINGS.LOG_FORMAT, log_format))


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def models(
    ctx: typer.Context,
    config_file: str | None = typer.Option(None, "--config", help="Config file (.chattools.yaml auto-discovered)"),
) -> None:
    """List known model keys and their maximum token limits."""
    settings = _load_settings(ctx, config_file)
    registry = ModelRegistry.with_extra(settings.MODEL_LIMITS)

    table = Table(title="Model keys")
    table.add_column("Key")
    table.add_column("Max tokens", justify="right")
    for key, limit in registry:
        table.add_row(key, f"{limit:,}")
    _console(settings).print(table)


@app.command()
def estimate(
    ctx: typer.Context,
    input_file: Path = typer.Argument(..., help="Text file to measure"),
    clean: str | None = typer.Option(None, "--clean", help="Clean mode: unicode|ascii|none"),
    config_file: str | None = typer.Option(None, "--config", help="Config file (.chattools.yaml auto-discovered)"),
) -> None:
    """Estimate token and word counts for a file."""
    settings = _load_settings(ctx, config_file)

    try:
        mode = CleanMode.parse(clean or settings.CLEAN_MODE)
        raw = artifacts.read_document(input_file)
    except ChatToolsError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    stats = analyze_text(raw, mode, settings.TOP_WORDS)
    log.info(
        "estimate.done",
        file=str(input_file),
        clean_mode=mode.value,
        cleaned_chars=stats.cleaned_chars,
        approx_tokens=stats.units,
    )

    console = _console(settings)
    console.print("=== TokenEstimator ===")
    console.print(f"File: {input_file.resolve()}")
    console.print(f"Clean mode: {mode.value}")
    console.print(f"Cleaned chars: {stats.cleaned_chars:,}")
    console.print(f"Approx tokens (chars/4): {stats.units:,}")
    console.print(f"Word count (approx): {stats.words:,}")

    table = Table(title="Top words")
    table.add_column("Word")
    table.add_column("Count", justify="right")
    for word, count in stats.top_words:
        table.add_row(word, str(count))
    console.print(table)

    console.print("Hints:")
    console.print(" - If approx tokens > model limit, consider chunking (chattools chunk).")
    console.print(" - Results are approximate; for precise tokenization, integrate a tokenizer library.")


@app.command()
def chunk(
    ctx: typer.Context,
    input_file: Path = typer.Argument(..., help="Text file to split"),
    model_key: str = typer.Argument(..., help="Model key, see 'chattools models'"),
    out_dir: Path | None = typer.Argument(None, help="Output directory (default: <name>__chunks)"),
    overlap: str | None = typer.Option(None, "--overlap", help="Overlap in tokens (default 200)"),
    max_tokens: str | None = typer.Option(None, "--max", help="Override the model's max tokens"),
    headroom: str | None = typer.Option(None, "--headroom", help="Unused safety fraction (default 0.15)"),
    clean: str | None = typer.Option(None, "--clean", help="Clean mode: unicode|ascii|none"),
    config_file: str | None = typer.Option(None, "--config", help="Config file (.chattools.yaml auto-discovered)"),
) -> None:
    """
    Split a large file into chunks sized for the given model.

    Writes <name>__partNN.txt files, chunk_plan.txt and summary_prompts.txt.
    Malformed numeric options fall back to their defaults.
    """
    settings = _load_settings(ctx, config_file)
    registry = ModelRegistry.with_extra(settings.MODEL_LIMITS)

    overlap_units = _parse_int(overlap, settings.OVERLAP_TOKENS)
    headroom_fraction = _parse_float(headroom, settings.HEADROOM)

    try:
        raw = artifacts.read_document(input_file)
        model_max = registry.max_units(model_key)
        mode = CleanMode.parse(clean or settings.CLEAN_MODE)
        override = (
            _parse_int(max_tokens, model_max)
            if max_tokens is not None
            else settings.MAX_TOKENS_OVERRIDE
        )
        budget = compute_budget(model_max, headroom_fraction, override)
        plan = chunk_text(raw, budget, overlap_units, mode)
    except ChatToolsError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    key = model_key.lower()
    target = out_dir or artifacts.default_output_dir(input_file)
    log.info(
        "chunk.plan",
        file=str(input_file),
        model=key,
        max_tokens=budget.max_units,
        budget_tokens=budget.unit_budget,
        overlap_tokens=overlap_units,
        overlap_chars=overlap_chars_for(overlap_units),
        clean_mode=mode.value,
        chunks=len(plan.chunks),
    )

    base = artifacts.base_name(input_file)
    try:
        paths = artifacts.write_chunks(plan, target, base)
        artifacts.write_plan(plan, target, key, budget, overlap_units)
        artifacts.write_prompts(target)
    except OSError as e:
        typer.echo(f"❌ Error writing output: {e}", err=True)
        raise typer.Exit(1) from e

    console = _console(settings)
    console.print("=== TokenChunker ===")
    console.print(f"Model: {key} (max={budget.max_units} tokens), headroom={int(budget.headroom * 100)}%")
    console.print(f"Budget (per chunk): ~{budget.unit_budget} tokens")
    console.print(f"Overlap: {overlap_units} tokens (~{overlap_chars_for(overlap_units)} chars)")
    console.print(f"Clean mode: {mode.value}")

    table = Table(title="Chunks")
    table.add_column("File")
    table.add_column("Tokens", justify="right")
    table.add_column("Split")
    for path, item in zip(paths, plan.chunks):
        flag = " [>MAX!]" if item.units > budget.max_units else ""
        table.add_row(path.name, f"~{item.units}{flag}", item.split_strategy)
        log.info("chunk.written", file=path.name, tokens=item.units)
    console.print(table)

    oversized = plan.over_limit(budget.max_units)
    if oversized:
        log.warning("chunk.over_limit", parts=[c.index for c in oversized])

    console.print(f"Done. Files written to: {target.resolve()}")
    console.print(f" - {artifacts.PLAN_FILENAME}")
    console.print(f" - {artifacts.PROMPTS_FILENAME}")
    console.print(f" - {len(plan.chunks)} chunk files")
    log.info("chunk.done", out_dir=str(target), chunks=len(plan.chunks), total_tokens=plan.total_units)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
