"""
Command-line demo
=================
Solves a sample problem of every type and prints the half-rise time and
the Parker estimate of the diffusivity.

Usage:
    $ python -m laserflash [--debug] [--plot]
"""
import argparse
import logging

from laserflash.config import DEFAULT_SCHEME_CONFIG
from laserflash.logging_config import setup_logging
from laserflash.problem import (
    DiathermicProblem,
    LinearisedProblem,
    NonlinearProblem,
    Pulse,
    TranslucentProblem,
)
from laserflash.problem.adiabatic import classic_solution, parker_diffusivity
from laserflash.schemes.solver import solve

logger = logging.getLogger("laserflash")


def main() -> None:
    parser = argparse.ArgumentParser(prog="laserflash", description=__doc__.splitlines()[1])
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--plot", action="store_true", help="plot the linearised curve")
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)

    # 2 mm sample, a = 1e-5 m²/s
    thickness = 2e-3
    diffusivity = 1e-5
    common = dict(
        thickness=thickness,
        diffusivity=diffusivity,
        maximum_temperature=1.0,
        pulse=Pulse(width=2e-3),
    )
    config = DEFAULT_SCHEME_CONFIG.with_changes(time_limit=0.5)

    problems = [
        LinearisedProblem(**common),
        DiathermicProblem(front_biot=0.1, diathermic_coefficient=0.2, **common),
        TranslucentProblem(**common),
        NonlinearProblem(front_biot=0.1, rear_biot=0.1, test_temperature=800.0, maximum_heating=5.0, **common),
    ]

    curves = {}
    for problem in problems:
        curve = solve(problem, config)
        curves[problem.type] = curve
        half_time = curve.half_rise_time()
        print(
            f"{problem.type:<12} t_1/2 = {half_time * 1e3:8.3f} ms   "
            f"a_Parker = {parker_diffusivity(thickness, half_time):.4e} m²/s"
        )

    if args.plot:
        linearised = curves[problems[0].type]
        reference = classic_solution(problems[0], config.time_limit, num_points=problems[0].num_points)
        linearised.plot(reference=reference)


if __name__ == "__main__":
    main()
