"""
WorldWater CLI

Run sea level rise simulations, scenario projections and single-point flood
evaluations from the terminal
"""
import sys

import click
from rich.console import Console
from rich.table import Table

from worldwater import __version__
from worldwater.config import get_config
from worldwater.flood import FloodSession, load_geoid
from worldwater.locations import LOCATIONS, get_location_by_id, population_at_risk
from worldwater.scenario import get_scenario_presets
from worldwater.scenario.runner import simulate_projection
from worldwater.simulation import SimulationResult, create_rng, run_simulation, seed_for_temperature
from worldwater.simulation.impact import contributor_breakdown, get_impact_description, histogram
from worldwater.simulation.sampler import CONTRIBUTORS, sample_iteration
from worldwater.utils import WorldWaterError, get_logger, setup_logging

console = Console()
logger = get_logger(__name__)

_METRICS = click.Choice(["median", "p95"])


def _fail(exc: Exception) -> None:
    console.print(f"\n[red]✗ Error: {exc}[/red]")
    sys.exit(1)


def _print_result(result: SimulationResult, metric: str, show_histogram: bool, location_id: str | None):
    cfg = get_config()

    table = Table(title=f"Sea Level Rise at +{result.temperature_increase:.2f}°C")
    table.add_column("Statistic", style="cyan")
    table.add_column("Meters", style="magenta", justify="right")
    for label in ("mean", "median", "p5", "p95", "min", "max"):
        table.add_row(label, f"{getattr(result.stats, label):.3f}")
    console.print(table)

    contributors = Table(title="Contributors")
    contributors.add_column("Source", style="cyan")
    contributors.add_column("Mean (m)", justify="right")
    contributors.add_column("P5-P95 (m)", justify="right")
    contributors.add_column("Share", justify="right")
    for row in contributor_breakdown(result):
        cs = result.per_contributor_stats[row["key"]]
        contributors.add_row(
            row["name"],
            f"{row['mean']:.3f}",
            f"{cs.p5:.3f}-{cs.p95:.3f}",
            f"{row['share_pct']:.1f}%",
        )
    console.print(contributors)

    console.print(f"\n[bold]Impact:[/bold] {get_impact_description(result.stats.median)}")
    console.print(
        f"[bold]Flood level ({metric}):[/bold] {result.flood_level(metric):.3f} m"
        f"  [dim]({result.iterations} iterations, seed {result.seed})[/dim]"
    )

    if show_histogram:
        bins = histogram(result, cfg.histogram_bins)
        peak = max((b.count for b in bins), default=0)
        console.print()
        for b in bins:
            bar = "█" * (round(b.count / peak * 40) if peak else 0)
            console.print(f"{b.start:6.2f}-{b.end:5.2f} m  {bar} {b.count}")

    if location_id:
        location = get_location_by_id(location_id)
        at_risk = population_at_risk(location.id, result.stats.median)
        console.print(
            f"\n[bold]{location.name}:[/bold] ~{at_risk:,} people at risk"
            f" (coastal population {location.coastal_population:,})"
        )


def _print_draws(temperature: float, seed: int, count: int):
    """Replay the first ``count`` iterations of a seeded run, unsorted."""
    rng = create_rng(seed)
    table = Table(title=f"First {count} draws (seed {seed})")
    table.add_column("#", justify="right")
    for c in CONTRIBUTORS:
        table.add_column(c.name, justify="right")
    table.add_column("Total (m)", style="magenta", justify="right")
    for i in range(count):
        sample = sample_iteration(temperature, rng)
        values = [f"{sample.per_contributor[c.key]:.3f}" for c in CONTRIBUTORS]
        table.add_row(str(i + 1), *values, f"{sample.total:.3f}")
    console.print(table)


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version=__version__)
def main():
    """
    WorldWater - Monte Carlo sea level rise projections

    Simulates sea level rise from five ice and ocean contributors and
    composites geoid-corrected flood surfaces.
    """
    cfg = get_config()
    setup_logging(cfg.log_level, cfg.log_file)


# ═══════════════════════════════════════════════════════════════════
# SIMULATION COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('temperature', type=float)
@click.option('--iterations', '-n', type=int, default=None, help='Monte Carlo iterations')
@click.option('--seed', type=int, default=None, help='PRNG seed (derived from temperature if omitted)')
@click.option('--metric', type=_METRICS, default=None, help='Statistic used as the flood level')
@click.option('--histogram', 'show_histogram', is_flag=True, help='Print the distribution')
@click.option('--location', 'location_id', default=None, help='Location id for population at risk')
@click.option('--draws', type=click.IntRange(min=0), default=0, help='Also print the first N individual draws')
def simulate(temperature, iterations, seed, metric, show_histogram, location_id, draws):
    """Simulate sea level rise for a warming level in °C"""
    cfg = get_config()
    iterations = cfg.iterations if iterations is None else iterations
    seed = seed_for_temperature(temperature, cfg.base_seed) if seed is None else seed

    try:
        with console.status("[bold green]Sampling..."):
            result = run_simulation(temperature, iterations, seed=seed)
        _print_result(result, metric or cfg.flood_metric, show_histogram, location_id)
        if draws and result.iterations:
            _print_draws(temperature, seed, min(draws, result.iterations))
    except WorldWaterError as e:
        _fail(e)


@main.command()
@click.argument('scenario_id')
@click.argument('year', type=int)
@click.option('--iterations', '-n', type=int, default=None, help='Monte Carlo iterations')
@click.option('--metric', type=_METRICS, default=None, help='Statistic used as the flood level')
@click.option('--histogram', 'show_histogram', is_flag=True, help='Print the distribution')
def project(scenario_id, year, iterations, metric, show_histogram):
    """Simulate an SSP scenario in a given year"""
    cfg = get_config()

    try:
        run = simulate_projection(scenario_id, year, iterations=iterations)
        console.print(
            f"\n[bold blue]{run.scenario.label} {run.year}:[/bold blue]"
            f" +{run.temperature_increase:.2f}°C"
        )
        _print_result(run.result, metric or cfg.flood_metric, show_histogram, None)
    except WorldWaterError as e:
        _fail(e)


# ═══════════════════════════════════════════════════════════════════
# CATALOG COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
def scenarios():
    """List SSP scenario presets"""
    presets = get_scenario_presets()
    years = sorted({y for s in presets for y in s.anchor_years})

    table = Table(title="SSP Scenarios")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    for year in years:
        table.add_column(str(year), justify="right")
    for s in presets:
        temps = [
            f"+{s.temperatures_by_year[y]:.1f}°C" if y in s.temperatures_by_year else "-"
            for y in years
        ]
        table.add_row(s.id, s.label, *temps)
    console.print(table)


@main.command()
def locations():
    """List predefined coastal locations"""
    table = Table(title="Locations")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Avg elevation (m)", justify="right")
    table.add_column("Coastal population", justify="right")
    for loc in LOCATIONS:
        table.add_row(loc.id, loc.name, f"{loc.avg_elevation:g}", f"{loc.coastal_population:,}")
    console.print(table)


# ═══════════════════════════════════════════════════════════════════
# FLOOD COMMANDS
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.option('--slr', type=float, required=True, help='Sea level rise (m)')
@click.option('--height', type=float, required=True, help='Terrain height above the ellipsoid (m)')
@click.option('--u', 'u', type=click.FloatRange(0, 1), default=0.5, help='Texture u (west to east)')
@click.option('--v', 'v', type=click.FloatRange(0, 1), default=0.5, help='Texture v (south to north)')
@click.option('--previous-slr', type=float, default=None, help='Earlier level to compare against')
@click.option('--geoid', 'geoid_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='EGM96 WW15MGH.DAC file')
def flood(slr, height, u, v, previous_slr, geoid_path):
    """Evaluate the flood overlay at one point once the fade has settled"""
    try:
        grid = load_geoid(geoid_path) if geoid_path else None
        session = FloodSession(grid)
        if previous_slr is not None:
            session.set_flood_level(previous_slr)
        session.set_flood_level(slr)
        session.show_comparison()
        session.settle()
        decision = session.evaluate(height, u, v)
    except WorldWaterError as e:
        _fail(e)
        return

    undulation = session.geoid.undulation(u, v)
    table = Table(title="Flood Decision")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta", justify="right")
    table.add_row("Geoid corrected", "yes" if session.uses_geoid else "no")
    table.add_row("Undulation (m)", f"{undulation:.3f}")
    table.add_row("Flood surface (m)", f"{undulation + session.sea_level_rise:.3f}")
    table.add_row("Flooded", "yes" if decision.is_flooded else "no")
    table.add_row("Flood opacity", f"{decision.flood_opacity:.3f}")
    table.add_row("Comparison band", "yes" if decision.is_comparison_band else "no")
    table.add_row("Rendered opacity", f"{decision.opacity:.3f}")
    console.print(table)


if __name__ == '__main__':
    main()
