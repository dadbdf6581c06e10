"""Command-line interface for SVOverlap.

This module provides the main entry point for the svoverlap CLI tool.
It uses Click to define commands and rich for console output.

Commands:
    annotate: Annotate an SV VCF with overlap fractions of named region sets

Example:
    $ svoverlap --help
    $ svoverlap annotate -V calls.vcf.gz -O annotated.vcf.gz \\
        --region-file coding.bed --region-name coding \\
        --region-file segdups.interval_list --region-name segdup
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from svoverlap import __version__

# Initialize rich console for pretty output
console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="svoverlap")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """SVOverlap: annotate structural variants with region overlap fractions.

    Each named region set becomes one INFO field holding, for every record,
    the fraction of the variant covered by the regions (0/1 for breakend
    and inter-chromosomal calls).
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# =============================================================================
# annotate command
# =============================================================================


@main.command()
@click.option(
    "-V",
    "--variant",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Input SV VCF/BCF (must declare ##contig lines).",
)
@click.option(
    "-O",
    "--output",
    type=click.Path(path_type=Path),
    required=True,
    help="Output VCF (.vcf, .vcf.gz or .bcf).",
)
@click.option(
    "--region-file",
    "region_files",
    type=click.Path(exists=True, path_type=Path),
    multiple=True,
    help="Region interval file (BED, interval_list or interval list). Repeatable.",
)
@click.option(
    "--region-name",
    "region_names",
    type=str,
    multiple=True,
    help="Region name, one per --region-file in the same order. "
    "Must be unique after converting to upper-case.",
)
@click.option(
    "--region-set-rule",
    type=click.Choice(["UNION", "INTERSECTION"], case_sensitive=False),
    default=None,
    help="Region interval set rule.  [default: UNION]",
)
@click.option(
    "--region-merging-rule",
    type=click.Choice(["OVERLAPPING_ONLY", "ALL"], case_sensitive=False),
    default=None,
    help="Region interval merging rule.  [default: OVERLAPPING_ONLY]",
)
@click.option(
    "--region-padding",
    type=click.IntRange(min=0),
    default=None,
    help="Region padding (bp).  [default: 0]",
)
@click.option(
    "--require-breakend-overlap/--no-require-breakend-overlap",
    default=None,
    help="Require both ends of the variant to be included in the region.",
)
@click.option(
    "-L",
    "--intervals",
    "intervals",
    type=str,
    multiple=True,
    help="Not supported; use --region-file instead.",
)
@click.option(
    "-XL",
    "--exclude-intervals",
    "exclude_intervals",
    type=str,
    multiple=True,
    help="Not supported; use --region-file instead.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="TOML configuration file. Command-line values take precedence.",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Write a debug log to this file.",
)
@click.pass_context
def annotate(
    ctx: click.Context,
    variant: Path,
    output: Path,
    region_files: tuple[Path, ...],
    region_names: tuple[str, ...],
    region_set_rule: Optional[str],
    region_merging_rule: Optional[str],
    region_padding: Optional[int],
    require_breakend_overlap: Optional[bool],
    intervals: tuple[str, ...],
    exclude_intervals: tuple[str, ...],
    config_path: Optional[Path],
    log_file: Optional[Path],
) -> None:
    """Annotate SV records with their overlap with named region sets.

    \b
    Scores:
    - DEL/DUP/INV/INS/CNV on one contig: fraction of the variant span
      covered by the region set (0-1)
    - BND and inter-chromosomal calls: 1 if both breakends lie in the
      region set, else 0

    \b
    Examples:
        # One region set
        $ svoverlap annotate -V calls.vcf.gz -O out.vcf.gz \\
            --region-file coding.bed --region-name coding

        # Two region sets, padded, both breakends required
        $ svoverlap annotate -V calls.vcf.gz -O out.vcf.gz \\
            --region-file coding.bed --region-name coding \\
            --region-file segdups.bed --region-name segdup \\
            --region-padding 100 --require-breakend-overlap
    """
    from svoverlap.config import AnnotateConfig
    from svoverlap.core.annotate import AnnotationDriver
    from svoverlap.io.vcf import AnnotatedVcfWriter, VcfCallSource
    from svoverlap.utils.logging import Timer, get_logger, setup_logging

    verbose = ctx.obj.get("verbose", False)
    quiet = ctx.obj.get("quiet", False)
    setup_logging(verbosity=0 if quiet else (2 if verbose else 1), log_file=log_file)
    logger = get_logger("svoverlap.cli")

    try:
        config = AnnotateConfig.load(
            config_path,
            region_files=list(region_files),
            region_names=list(region_names),
            set_rule=region_set_rule.upper() if region_set_rule else None,
            merging_rule=region_merging_rule.upper() if region_merging_rule else None,
            padding=region_padding,
            require_breakend_overlap=require_breakend_overlap,
            intervals=list(intervals),
            exclude_intervals=list(exclude_intervals),
        )
        config.validate()
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if not quiet:
        console.print(f"[blue]Variants:[/blue] {variant}")
        console.print(f"[blue]Region sets:[/blue] {len(config.region_files)}")
        for name, path in zip(config.formatted_region_names, config.region_files):
            console.print(f"  - {name}: {path.name}")
        console.print(
            f"[blue]Rules:[/blue] set={config.set_rule.value}, "
            f"merging={config.merging_rule.value}, padding={config.padding} bp"
        )
        if config.require_breakend_overlap:
            console.print("[blue]Breakend overlap:[/blue] required")
        console.print(f"[blue]Output:[/blue] {output}")

    sink = None
    try:
        with VcfCallSource(variant) as source:
            driver = AnnotationDriver.from_config(config, source.dictionary)
            with Timer("Annotation", logger) as timer:
                with AnnotatedVcfWriter(output, source.header, driver.header_lines) as sink:
                    n_records = driver.run(source, sink)
    except (ValueError, FileNotFoundError) as e:
        if sink is not None:
            # Partial output
            logger.debug(f"Removing {output}")
            output.unlink(missing_ok=True)
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if not quiet:
        console.print(
            f"[green]Done.[/green] Annotated {n_records:,} records "
            f"with {len(driver.region_names)} region set(s) in {timer.elapsed:.2f}s"
        )


if __name__ == "__main__":
    main()
