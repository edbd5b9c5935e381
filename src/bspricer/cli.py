import argparse
import logging
import sys

from .analysis import describe
from .batch import price_book, read_rows, summarize, write_results
from .black_scholes import ValuationEngine
from .config import Config, DisplayConfig, load_config, setup_logging
from .core import CALL, KINDS, normalise_kind
from .exceptions import InvalidParameter

logger = logging.getLogger(__name__)

RULE = "━" * 53

PROMPTS = (
    ("S", "Enter Stock Price (S): $", True),
    ("K", "Enter Strike Price (K): $", True),
    ("T", "Enter Time to Maturity (T) in years: ", True),
    ("r", "Enter Risk-free Rate (r) as decimal (e.g., 0.05 for 5%): ", False),
    ("sigma", "Enter Volatility (sigma) as decimal (e.g., 0.20 for 20%): ", True),
)


def _kind(s: str):
    s = s.lower()
    if s == "both":
        return s
    try:
        return normalise_kind(s)
    except ValueError:
        raise argparse.ArgumentTypeError("kind must be 'call', 'put' or 'both'")


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--S", type=float, required=True, help="spot price")
    parser.add_argument("--K", type=float, required=True, help="strike price")
    parser.add_argument("--T", type=float, required=True, help="years")
    parser.add_argument("--r", type=float, required=True, help="cont. risk-free")
    parser.add_argument("--sigma", type=float, required=True)


def add_report_options(parser: argparse.ArgumentParser):
    parser.add_argument("--kind", type=_kind, default="both", help="call|put|both")
    parser.add_argument("--analysis", action="store_true",
                        help="append qualitative commentary")


def format_report(eng: ValuationEngine, kinds, display: DisplayConfig) -> list[str]:
    """Fixed-precision call/put blocks."""
    p = display.precision
    lines = []
    for kind in kinds:
        g = eng.greeks(kind)
        theta = g["theta"] / display.days_per_year if display.per_day_theta else g["theta"]
        vega = g["vega"] / 100.0 if display.vega_per_pct else g["vega"]
        rho = g["rho"] / 100.0 if display.rho_per_pct else g["rho"]
        title = "CALL OPTION" if kind == CALL else "PUT OPTION"
        lines += [
            RULE,
            f"{title:^53}".rstrip(),
            RULE,
            f"Price:  ${g['price']:.{p}f}",
            f"Delta:   {g['delta']:.{p}f}",
            f"Gamma:   {g['gamma']:.{p}f}",
            f"Theta:   {theta:.{p}f}",
            f"Vega:    {vega:.{p}f}",
            f"Rho:     {rho:.{p}f}",
            "",
        ]
    lines.append(f"Put-call parity residual: {eng.verify_put_call_parity():.3e}")
    return lines


def _emit_report(eng: ValuationEngine, args, config: Config):
    kinds = KINDS if args.kind == "both" else (args.kind,)
    for line in format_report(eng, kinds, config.display):
        print(line)
    if args.analysis:
        for kind in kinds:
            print()
            for line in describe(eng, kind, config.analysis, config.display):
                print(line)


def cmd_price(args, config: Config) -> int:
    eng = ValuationEngine(args.S, args.K, args.T, args.r, args.sigma)
    _emit_report(eng, args, config)
    return 0


def prompt_inputs(input_func=None, output=None) -> dict:
    """Ask for the five inputs, re-prompting on bad entries."""
    input_func = input_func or input
    output = output or sys.stdout
    values = {}
    for name, prompt, positive in PROMPTS:
        while True:
            raw = input_func(prompt)
            try:
                value = float(raw)
            except ValueError:
                print(f"  '{raw}' is not a number, try again.", file=output)
                continue
            if positive and not value > 0:
                print(f"  {name} must be positive, try again.", file=output)
                continue
            values[name] = value
            break
    return values


def cmd_interactive(args, config: Config) -> int:
    print(RULE)
    print("    Black-Scholes Options Pricing Engine")
    print(RULE)
    print()
    values = prompt_inputs()
    print()
    eng = ValuationEngine(**values)
    _emit_report(eng, args, config)
    return 0


def cmd_batch(args, config: Config) -> int:
    rows = read_rows(args.input)
    print(f"Pricing {len(rows)} scenarios...")
    results = price_book(rows, greeks=args.greeks)
    write_results(results, args.output)
    print(f"Results written to {args.output}")
    priced, failed = summarize(results)
    print(f"  Priced: {priced}  |  Failed: {failed}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bspricer",
                                description="Black-Scholes European option pricing")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--log-level", default=None,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_price = sub.add_parser("price", help="price and Greeks for one option")
    add_common(p_price)
    add_report_options(p_price)
    p_price.set_defaults(func=cmd_price)

    p_int = sub.add_parser("interactive", help="prompt for inputs")
    add_report_options(p_int)
    p_int.set_defaults(func=cmd_interactive)

    p_batch = sub.add_parser("batch", help="price a CSV of scenarios")
    p_batch.add_argument("--input", required=True, help="Path to scenario CSV")
    p_batch.add_argument("--output", required=True, help="Output path (.csv or .json)")
    p_batch.add_argument("--greeks", action="store_true", help="Compute Greeks")
    p_batch.set_defaults(func=cmd_batch)

    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    setup_logging(args.log_level or config.log_level)

    try:
        return args.func(args, config)
    except InvalidParameter as e:
        logger.debug(f"rejected {e.field}={e.value!r} ({e.reason})")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, EOFError) as e:
        print(f"Error: {str(e) or type(e).__name__}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
