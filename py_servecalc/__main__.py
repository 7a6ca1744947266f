import argparse
import json
from importlib import metadata

from py_servecalc import basicConfig, logger
from py_servecalc.conditions import ServeInput, ServeSide, TargetZone
from py_servecalc.exceptions import SolverRuntimeError
from py_servecalc.interface import Calculator
from py_servecalc.logger import set_debug

version = metadata.metadata("py_servecalc")['Version']


def add_serve_group(parser):
    serve = parser.add_argument_group('Serve', 'Serve parameters')
    serve.add_argument("-s", "--speed", action="store", type=float, required=True,
                       help="Serve speed (mph)")
    serve.add_argument("-hf", "--height-ft", action="store", type=float, default=0,
                       help="Contact height, feet part")
    serve.add_argument("-hi", "--height-in", action="store", type=float, default=0,
                       help="Contact height, inches part")
    serve.add_argument("-t", "--target", action="store", default=TargetZone.WIDE.value,
                       choices=[zone.value for zone in TargetZone], help="Target zone")
    serve.add_argument("--side", action="store", default=ServeSide.DEUCE.value,
                       choices=[side.value for side in ServeSide], help="Court served from")
    serve.add_argument("-si", "--step-in", action="store", type=float, default=0.5,
                       help="Contact point inside the baseline (m)")
    serve.add_argument("-c", "--clearance", action="store", type=float, default=20,
                       help="Requested clearance over the net (cm)")


def add_output_group(parser):
    output = parser.add_argument_group('Output')
    output.add_argument("-j", "--json", action="store_true", help="Print the result record as JSON")
    output.add_argument("-p", "--points", action="store", type=int, default=0,
                        help="Include this many trajectory samples in the JSON output")


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog=f'pyserve v{version}',
        description="Tool for tennis serve angle calculations"
    )
    parser.add_argument("-v", "--version", action='version',
                        version=f'pyserve v{version}', help="Show version")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug messages")
    parser.add_argument("--config", action="store", default=None,
                        help="A .toml file with preferred units and engine settings")

    add_serve_group(parser)
    add_output_group(parser)
    return parser


def main(args=None):
    parser = get_arg_parser()
    argv = parser.parse_args(args)
    if argv.points and argv.points < 2:
        parser.error("--points must be at least 2")

    if argv.debug:
        set_debug(True)

    try:
        if argv.config:
            basicConfig(argv.config)

        serve_input = ServeInput.from_record(argv.speed, argv.height_ft, argv.height_in,
                                             argv.target, argv.step_in, argv.clearance, argv.side)
        solution = Calculator().solve(serve_input)
    except (OSError, TypeError, ValueError, SolverRuntimeError) as exc:
        logger.exception(exc)
        return 1

    if argv.json:
        record = solution.to_dict()
        if argv.points:
            record['trajectory'] = [list(sample) for sample in solution.trajectory(argv.points)]
        print(json.dumps(record, indent=2))
    else:
        print(solution)
        if solution.advisory:
            print(solution.advisory)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
