"""
Command-line interface for the FX vanilla option engine.

This CLI provides access to:
- Option premiums and Greeks (Garman-Kohlhagen)
- Implied volatility and strike-by-delta solving
- FX quotation conventions (ATM strike, quoted delta → strike, delta harmonization)
- Premium / Greek surfaces exported as CSV
"""

import logging

import click
import numpy as np

from fxvanilla.core.black_scholes import compute_premium
from fxvanilla.core.greeks import compute_greeks
from fxvanilla.fx.quotation import atm_forward_strike, harmonize_delta, strike_from_quoted_delta
from fxvanilla.solvers.implied_vol import implied_volatility
from fxvanilla.solvers.strike_by_delta import strike_by_delta
from fxvanilla.surface import evaluate_surface
from fxvanilla.utils.errors import PricingError
from fxvanilla.utils.types import OptionParameters

SIDE_CHOICE = click.Choice(["call", "put", "c", "p"], case_sensitive=False)


def market_options(func):
    """Options shared by every command that needs a market state."""
    options = [
        click.option("--spot", "-S", type=float, required=True, help="Spot price"),
        click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)"),
        click.option("--rate", "-r", type=float, required=True, help="Domestic risk-free rate"),
        click.option("--foreign", "-q", type=float, default=0.0, help="Foreign rate / dividend yield"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _echo_diagnostics(diagnostics):
    for diagnostic in diagnostics:
        click.echo(f"Warning: {diagnostic.message}", err=True)


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """FX vanilla options - Garman-Kohlhagen pricing, Greeks and inversions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@cli.command()
@market_options
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
def price(spot, time, rate, foreign, strike, vol):
    """Calculate call and put premiums."""
    try:
        pair = compute_premium(OptionParameters(spot, strike, rate, time, vol, foreign))
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    _echo_diagnostics(pair.diagnostics)
    click.echo(f"\nCall Premium: {pair.call:.4f}")
    click.echo(f"Put Premium:  {pair.put:.4f}")


@cli.command()
@market_options
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
def greeks(spot, time, rate, foreign, strike, vol):
    """Calculate all Greeks for the call and the put."""
    try:
        bundle = compute_greeks(OptionParameters(spot, strike, rate, time, vol, foreign))
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    _echo_diagnostics(bundle.diagnostics)
    click.echo(f"\n{'Greek':<8}{'Call':>14}{'Put':>14}")
    for name, pair in bundle.items():
        click.echo(f"{name.capitalize():<8}{pair.call:>14.6f}{pair.put:>14.6f}")


@cli.command()
@market_options
@click.option("--premium", "-p", type=float, required=True, help="Market premium")
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--type", "-t", "side", type=SIDE_CHOICE, default="call")
def iv(spot, time, rate, foreign, premium, strike, side):
    """Solve for implied volatility."""
    try:
        result = implied_volatility(
            side, premium, OptionParameters(spot, strike, rate, time, 0.0, foreign)
        )
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    _echo_diagnostics(result.diagnostics)
    if result.success:
        click.echo(f"\nImplied Volatility: {result.value:.4f} ({result.value*100:.2f}%)")
        click.echo(f"Iterations: {result.iterations}")
    else:
        click.echo(f"\nNo solution: {result.message}", err=True)


@cli.command("strike-by-delta")
@market_options
@click.option("--delta", "-d", type=float, required=True, help="Target delta")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
@click.option("--type", "-t", "side", type=SIDE_CHOICE, default="call")
def strike_by_delta_command(spot, time, rate, foreign, delta, vol, side):
    """Solve for the strike with a given delta."""
    try:
        result = strike_by_delta(
            side, delta, OptionParameters(spot, 0.0, rate, time, vol, foreign)
        )
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    _echo_diagnostics(result.diagnostics)
    if result.success:
        click.echo(f"\nStrike: {result.value:.4f}")
        click.echo(f"Iterations: {result.iterations}")
    else:
        click.echo(f"\nNo solution: {result.message}", err=True)


@cli.command("atm-strike")
@market_options
@click.option("--vol", "-v", type=float, required=True, help="ATM volatility")
def atm_strike(spot, time, rate, foreign, vol):
    """Strike of the delta-neutral straddle."""
    try:
        strike = atm_forward_strike(OptionParameters(spot, 0.0, rate, time, vol, foreign))
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nATM Strike: {strike:.4f}")


@cli.command("quoted-strike")
@market_options
@click.option("--delta", "-d", type=float, required=True, help="Quoted delta (negative for puts)")
@click.option("--vol", "-v", type=float, required=True, help="Quoted volatility")
@click.option(
    "--forward-delta/--spot-delta",
    default=True,
    help="Delta quotation convention (default: forward delta)",
)
def quoted_strike(spot, time, rate, foreign, delta, vol, forward_delta):
    """Translate a quoted delta and volatility into a strike."""
    try:
        strike = strike_from_quoted_delta(
            OptionParameters(spot, 0.0, rate, time, vol, foreign), delta, forward_delta
        )
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nStrike: {strike:.4f}")


@cli.command()
@click.argument("deltas", type=float, nargs=-1, required=True)
def harmonize(deltas):
    """Convert deltas to call-delta equivalents (use -- before negative values)."""
    try:
        call_deltas = harmonize_delta(list(deltas))
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    for original, converted in zip(deltas, call_deltas):
        click.echo(f"{original:>8.4f} -> {converted:.4f}")


@cli.command()
@click.option("--strike", "-K", type=float, required=True, help="Strike price")
@click.option("--rate", "-r", type=float, required=True, help="Domestic risk-free rate")
@click.option("--foreign", "-q", type=float, default=0.0, help="Foreign rate / dividend yield")
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
@click.option("--spot-min", type=float, required=True, help="Lowest spot")
@click.option("--spot-max", type=float, required=True, help="Highest spot")
@click.option("--spot-steps", type=int, default=50, show_default=True)
@click.option("--ttm-min", type=float, default=1.0 / 252.0, help="Shortest maturity (years)")
@click.option("--ttm-max", type=float, default=0.25, help="Longest maturity (years)")
@click.option("--ttm-steps", type=int, default=50, show_default=True)
@click.option("--workers", type=int, default=None, help="Thread pool size")
@click.option("--output", "-o", type=click.Path(dir_okay=False, allow_dash=True), default="-")
def surface(
    strike, rate, foreign, vol, spot_min, spot_max, spot_steps, ttm_min, ttm_max, ttm_steps, workers, output
):
    """Evaluate premium and Greek surfaces and write them as CSV."""
    spots = np.linspace(spot_min, spot_max, spot_steps)
    maturities = np.linspace(ttm_min, ttm_max, ttm_steps)

    try:
        result = evaluate_surface(
            spots,
            maturities,
            OptionParameters(spot_min, strike, rate, ttm_min, vol, foreign),
            max_workers=workers,
        )
    except PricingError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    _echo_diagnostics(result.diagnostics)
    frame = result.to_frame()
    if output == "-":
        click.echo(frame.to_csv(index=False), nl=False)
    else:
        frame.to_csv(output, index=False)
        click.echo(f"Wrote {len(frame)} rows to {output}")


if __name__ == "__main__":
    cli()
