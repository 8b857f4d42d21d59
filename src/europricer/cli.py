import argparse
import logging
from .core import MarketInput, InvalidInput, LEGACY, TEXTBOOK, DEFAULT_N_PATHS
from .black_scholes import price_analytic
from .monte_carlo import euro_price_mc
from .validation import cross_validate

_FIELDS = ("premium", "days_to_expiry", "delta", "gamma", "theta", "vega",
           "rho", "implied_volatility", "intrinsic_value")


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--spot", type=float, default=100.0)
    parser.add_argument("--strike", type=float, default=100.0)
    parser.add_argument("--rate", type=float, default=0.05, help="cont. risk-free")
    parser.add_argument("--volatility", type=float, default=0.2)
    parser.add_argument("--T", type=float, default=1.0, help="years")
    parser.add_argument("--put", action="store_true", help="price a put (default call)")
    parser.add_argument("-v", "--verbose", action="store_true")


def add_mc(parser: argparse.ArgumentParser):
    parser.add_argument("--n-paths", dest="n_paths", type=int, default=DEFAULT_N_PATHS)
    parser.add_argument("--seed", type=int, default=None)


def _market(args, is_call=None) -> MarketInput:
    return MarketInput(
        spot=args.spot, strike=args.strike, rate=args.rate,
        volatility=args.volatility, time_to_maturity=args.T,
        is_call=(not args.put) if is_call is None else is_call,
    )


def cmd_analytic(args):
    res = price_analytic(_market(args), convention=args.convention,
                         market_premium=args.market_premium)
    for name in _FIELDS:
        print(f"{name:>20}: {getattr(res, name)}")


def cmd_mc(args):
    res = euro_price_mc(_market(args), args.n_paths, seed=args.seed,
                        n_workers=args.workers)
    print(f"{res.price:.10f}  (stderr {res.stderr:.10f})")


def cmd_compare(args):
    for is_call in (True, False):
        mkt = _market(args, is_call=is_call)
        cv = cross_validate(mkt, n_paths=args.n_paths, seed=args.seed)
        mc_px, mc_se = cv["mc"]
        print(f"European {mkt.kind.capitalize()} Option Price: "
              f"analytic {cv['analytic']:.6f}, monte carlo {mc_px:.6f} "
              f"(stderr {mc_se:.6f}, rel diff {cv['rel_diff']:.4%})")


def main(argv=None):
    p = argparse.ArgumentParser(prog="europricer", description="European option pricing CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Analytic
    p_bs = sub.add_parser("analytic", help="Black-Scholes premium and Greeks")
    add_common(p_bs)
    p_bs.add_argument("--convention", choices=(LEGACY, TEXTBOOK), default=LEGACY)
    p_bs.add_argument("--market-premium", dest="market_premium", type=float, default=None,
                      help="solve implied volatility for this observed price")
    p_bs.set_defaults(func=cmd_analytic)

    # Monte Carlo (GBM terminal)
    p_mc = sub.add_parser("mc", help="Monte Carlo price (GBM)")
    add_common(p_mc)
    add_mc(p_mc)
    p_mc.add_argument("--workers", type=int, default=1)
    p_mc.set_defaults(func=cmd_mc)

    # Side by side
    p_cmp = sub.add_parser("compare", help="analytic vs Monte Carlo, call and put")
    add_common(p_cmp)
    add_mc(p_cmp)
    p_cmp.set_defaults(func=cmd_compare)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except InvalidInput as exc:
        p.error(str(exc))

if __name__ == "__main__":
    main()
