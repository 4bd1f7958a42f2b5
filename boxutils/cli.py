import argparse
from colorama import Fore, Style

from .benchmark import run_benchmark, run_checks
from .config.benchmark_config import load_config
from .utils.logger import ColorLogger


def build_argparser():
    p = argparse.ArgumentParser(description='Bounding box IoU, refinement and clipping utilities')
    sub = p.add_subparsers(dest='cmd', required=True)

    pb = sub.add_parser('benchmark', help='time vectorized vs looped IoU')
    pc = sub.add_parser('check', help='run consistency checks on random boxes')

    for sp in (pb, pc):
        sp.add_argument('--config', type=str, default=None, help='YAML config file')
        sp.add_argument('--num-boxes1', dest='num_boxes1', type=int, default=None)
        sp.add_argument('--num-boxes2', dest='num_boxes2', type=int, default=None)
        sp.add_argument('--image-size', dest='image_size', type=float, default=None)
        sp.add_argument('--device', type=str, default=None)
        sp.add_argument('--dtype', type=str, default=None, choices=['float32', 'float64'])
        sp.add_argument('--seed', type=int, default=None)
        sp.add_argument('--tolerance', type=float, default=None)
        sp.add_argument('--log-dir', dest='log_dir', type=str, default=None)

    pb.add_argument('--runs', type=int, default=None)
    pb.add_argument('--warmup', type=int, default=None)

    return p


def _overrides(args):
    keys = ['num_boxes1', 'num_boxes2', 'image_size', 'device', 'dtype',
            'seed', 'tolerance', 'log_dir', 'runs', 'warmup']
    return {k: getattr(args, k, None) for k in keys}


def report_checks(results, logger):
    logger.info(f"IoU vectorized vs looped, max |diff|: {results['iou_max_abs_diff']:.3e} "
                f"over {results['num_pairs']} pairs")
    logger.info(f"Refinement round trip, max |diff| / image size: {results['round_trip_max_abs_diff']:.3e}")
    logger.info(f"Clip out-of-window boxes: {results['clip_out_of_bounds']}, "
                f"copy and in-place match: {results['clip_variants_match']}")
    if results['passed']:
        logger.success("All checks passed")
    else:
        logger.error("Checks failed")


def main(argv=None):
    args = build_argparser().parse_args(argv)

    try:
        config = load_config(args.config, _overrides(args))
    except (FileNotFoundError, ValueError) as e:
        ColorLogger().error(str(e))
        return 2

    logger = ColorLogger(config['log_dir'])
    print(f"\n{Fore.CYAN}boxutils {args.cmd}{Style.RESET_ALL}")

    try:
        if args.cmd == 'check':
            results = run_checks(config)
            report_checks(results, logger)
        else:
            results = run_benchmark(config, logger)
            report_checks(results, logger)
            logger.info(f"Vectorized: {results['vectorized_time'] * 1e3:.3f} ms/call")
            logger.info(f"Looped:     {results['looped_time'] * 1e3:.3f} ms/call")
            logger.info(f"Speedup:    {results['speedup']:.1f}x", color=Fore.GREEN)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130

    return 0 if results['passed'] else 1


if __name__ == '__main__':
    raise SystemExit(main())
