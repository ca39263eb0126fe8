"""Command-line interface for Glass Tuner.

Provides commands for:
- listen: Live tuner on the default microphone
- detect: Run the detection pipeline over an audio file
- note: Map a frequency to its nearest note
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import ConfigError, EndOfStream, TunerConfig
from .core.constants import (
    ABSOLUTE_THRESHOLD,
    DEFAULT_CADENCE_MS,
    DEFAULT_CAPTURE_LENGTH,
    DEFAULT_DETECTION_LENGTH,
    DEFAULT_SAMPLE_FORMAT,
    DEFAULT_SAMPLE_RATE,
    MIN_AUDIBLE_FREQUENCY,
    REFERENCE_PITCH,
)

app = typer.Typer(
    name="tuner",
    help="Real-time monophonic pitch detection",
    rich_markup_mode="markdown",
)
console = Console()
err_console = Console(stderr=True)

SAMPLE_RATE_OPTION = typer.Option(DEFAULT_SAMPLE_RATE, "--sample-rate", "-r", help="Sample rate in Hz")
CAPTURE_OPTION = typer.Option(DEFAULT_CAPTURE_LENGTH, "--capture-length", help="Samples per captured block")
DETECTION_OPTION = typer.Option(
    DEFAULT_DETECTION_LENGTH, "--detection-length", "-n",
    help="YIN buffer length (at most half the capture length)",
)
THRESHOLD_OPTION = typer.Option(ABSOLUTE_THRESHOLD, "--threshold", help="YIN absolute threshold")
MIN_FREQ_OPTION = typer.Option(
    MIN_AUDIBLE_FREQUENCY, "--min-frequency", help="Report '?' at or below this frequency (Hz)"
)
REFERENCE_OPTION = typer.Option(REFERENCE_PITCH, "--reference", "-a", help="Frequency of A4 in Hz")
FORMAT_OPTION = typer.Option(DEFAULT_SAMPLE_FORMAT, "--format", help="PCM encoding: pcm8/pcm16/pcm32")
FFT_OPTION = typer.Option(False, "--fft", help="Use the FFT difference function")
VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Verbose output")


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def build_config(**settings: Any) -> TunerConfig:
    """Create and validate a config, exiting with a message if it is unusable."""
    try:
        return TunerConfig(**settings).validate()
    except ConfigError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def listen(
    sample_rate: int = SAMPLE_RATE_OPTION,
    capture_length: int = CAPTURE_OPTION,
    detection_length: int = DETECTION_OPTION,
    cadence_ms: int = typer.Option(
        DEFAULT_CADENCE_MS, "--cadence", "-c", help="Milliseconds between updates"
    ),
    threshold: float = THRESHOLD_OPTION,
    min_frequency: float = MIN_FREQ_OPTION,
    reference: float = REFERENCE_OPTION,
    sample_format: str = FORMAT_OPTION,
    fft: bool = FFT_OPTION,
    device: Optional[str] = typer.Option(
        None, "--device", "-d", help="Input device name or index"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Show the note being played into the microphone. Ctrl+C to stop.

    **Examples:**

        tuner listen

        tuner listen --reference 442 --detection-length 2048 --capture-length 4096
    """
    from .input import MicrophoneSource
    from .pipeline import ConsoleDisplay, PipelineDriver

    setup_logging(verbose)
    config = build_config(
        sample_rate=sample_rate,
        capture_length=capture_length,
        detection_length=detection_length,
        cadence_ms=cadence_ms,
        threshold=threshold,
        min_frequency=min_frequency,
        reference_pitch=reference,
        sample_format=sample_format,
        difference_method="fft" if fft else "direct",
    )

    if device is not None and device.isdigit():
        device = int(device)

    try:
        source = MicrophoneSource(config.sample_rate, config.sample_format, device=device)
        source.open()
    except (ImportError, OSError) as e:
        console.print(f"[red]Cannot open audio input: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[blue]Listening at {config.sample_rate} Hz (A4 = {config.reference_pitch:g} Hz)[/blue]")
    try:
        with ConsoleDisplay(console) as display:
            driver = PipelineDriver(source.read_into, display, config)
            driver.run()
    except KeyboardInterrupt:
        console.print("[dim]Stopped[/dim]")
    finally:
        source.close()


@app.command()
def detect(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3...)"),
    sample_rate: int = SAMPLE_RATE_OPTION,
    capture_length: int = CAPTURE_OPTION,
    detection_length: int = DETECTION_OPTION,
    threshold: float = THRESHOLD_OPTION,
    min_frequency: float = MIN_FREQ_OPTION,
    reference: float = REFERENCE_OPTION,
    sample_format: str = FORMAT_OPTION,
    fft: bool = FFT_OPTION,
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Run the detection pipeline over an audio file, one row per block.

    **Examples:**

        tuner detect a440.wav

        tuner detect guitar.flac --detection-length 2048 --capture-length 4096 --json
    """
    from .input import FileSource
    from .pipeline import PipelineDriver

    setup_logging(verbose)
    config = build_config(
        sample_rate=sample_rate,
        capture_length=capture_length,
        detection_length=detection_length,
        cadence_ms=0,
        threshold=threshold,
        min_frequency=min_frequency,
        reference_pitch=reference,
        sample_format=sample_format,
        difference_method="fft" if fft else "direct",
    )

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        source = FileSource(input_file, config.sample_rate, config.sample_format)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not json_output:
        console.print(f"[blue]Analyzing:[/blue] {input_file} ({source.duration:.2f}s)")

    driver = PipelineDriver(source.read_into, lambda status: None, config)
    rows: List[Dict[str, Any]] = []
    while True:
        start = source.position / config.sample_rate
        try:
            result = driver.run_cycle()
        except EndOfStream:
            break
        rows.append({
            "block": len(rows),
            "time": round(start, 4),
            "status": result.status,
            "frequency": round(result.frequency, 4),
            "note": result.note.name if result.note else None,
            "cents": round(result.note.cents, 2) if result.note else None,
        })

    if json_output:
        print(json.dumps({"file": str(input_file), "sample_rate": config.sample_rate, "blocks": rows}, indent=2))
    else:
        _show_blocks_table(rows)


@app.command()
def note(
    frequency: float = typer.Argument(..., help="Frequency in Hz"),
    reference: float = REFERENCE_OPTION,
):
    """Show the note nearest to a frequency and how far off it is."""
    from .analysis import NoteMapper

    try:
        mapped = NoteMapper(reference).map_to_note(frequency)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    style = "green" if mapped.in_tune else "yellow"
    console.print(
        f"{mapped.name} [{style}]{mapped.cents:+.1f} cents[/{style}] "
        f"(target {mapped.target_frequency:.2f} Hz)"
    )


def _show_blocks_table(rows: List[Dict[str, Any]]) -> None:
    """Display per-block detection results in a table."""
    table = Table(title="Detected Pitch")
    table.add_column("Block", style="cyan")
    table.add_column("Time (s)", style="green")
    table.add_column("Status", style="bold")
    table.add_column("Frequency (Hz)", style="yellow")
    table.add_column("Cents", style="magenta")

    for row in rows:
        table.add_row(
            str(row["block"]),
            f"{row['time']:.3f}",
            row["status"],
            f"{row['frequency']:.2f}",
            f"{row['cents']:+.1f}" if row["cents"] is not None else "-",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
