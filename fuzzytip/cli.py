"""Command line front end: train, test and query the fuzzy tip network."""

from __future__ import annotations

import argparse
import re
import sys
import threading
from os import PathLike
from pathlib import Path
from typing import Callable, Sequence

import numpy as np

from fuzzytip.history import PlotHistory
from fuzzytip.network import Activation
from fuzzytip.plots import plot_losses, plot_memberships
from fuzzytip.trainer import FuzzyTrainer, ProgressReport

_FILENAME_PATTERN = "Model_H_{hidden}_L_{layers}.pt"


def model_filename(
    directory: str | PathLike[str], hidden: int, layers: int
) -> Path:
    """Path of the file a network with this shape is saved to."""
    return Path(directory) / _FILENAME_PATTERN.format(hidden=hidden, layers=layers)


def parse_model_filename(path: str | PathLike[str]) -> tuple[int, int]:
    """Read (hidden, layers) back from a name made by :func:`model_filename`."""
    name = re.split(r"[\\/]", str(path))[-1]
    cols = re.split(r"[_.]", name)
    if len(cols) < 5:
        raise ValueError(f"not a model file name: {name!r}")
    try:
        return int(cols[2]), int(cols[4])
    except ValueError:
        raise ValueError(f"not a model file name: {name!r}") from None


def _bounded(kind: Callable[[str], float], low: float, high: float):
    def convert(text: str):
        try:
            value = kind(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid value: {text!r}") from None
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"{text} is not in [{low}, {high}]")
        return value

    return convert


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--hidden", type=_bounded(int, 3, 100), default=9)
    common.add_argument("--layers", type=_bounded(int, 1, 10), default=2)
    common.add_argument(
        "--activation",
        choices=[a.value for a in Activation],
        default=Activation.RELU.value,
    )
    common.add_argument("--batch-size", type=_bounded(int, 1, 100), default=16)
    common.add_argument(
        "--learning-rate", type=_bounded(float, 0.00001, 0.01), default=0.001
    )
    common.add_argument("--log-interval", type=_bounded(int, 1, 1000), default=5)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument(
        "--load", metavar="FILE", default=None,
        help="load a saved model; its shape is read from the file name",
    )

    parser = argparse.ArgumentParser(
        prog="fuzzytip", description="Train a network to reproduce fuzzy tip rules."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("network", parents=[common], help="describe the network")

    train = commands.add_parser("train", parents=[common], help="train the network")
    train.add_argument("--samples", type=_bounded(int, 1000, 100000), default=10000)
    train.add_argument("--save", metavar="DIR", default=None)
    train.add_argument("--plot", metavar="FILE", default=None)

    test = commands.add_parser("test", parents=[common], help="test the network")
    test.add_argument("--test-samples", type=_bounded(int, 10, 1000), default=100)
    test.add_argument("--plot", metavar="FILE", default=None)

    tip = commands.add_parser(
        "tip", parents=[common], help="compare fuzzy and network tip"
    )
    tip.add_argument("price", type=_bounded(float, 15.0, 50.0))
    tip.add_argument("time", type=_bounded(float, 15.0, 60.0))
    tip.add_argument("quality", type=_bounded(float, 0.0, 1.0))
    tip.add_argument("--plot", metavar="FILE", default=None)
    return parser


def _run_interruptible(trainer: FuzzyTrainer, job: Callable[[], object]) -> bool:
    """Run ``job`` in a worker; Ctrl-C aborts training. Returns False if aborted."""
    errors: list[BaseException] = []

    def target() -> None:
        try:
            job()
        except BaseException as exc:  # re-raised in the calling thread
            errors.append(exc)

    worker = threading.Thread(target=target, daemon=True)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(0.1)
    except KeyboardInterrupt:
        trainer.abort_train = True
        worker.join()
        trainer.abort_train = False
        if errors:
            raise errors[0]
        return False
    if errors:
        raise errors[0]
    return True


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    history = PlotHistory()

    def on_train(report: ProgressReport) -> None:
        history.add_train(report.loss)
        print(report.info)

    def on_test(report: ProgressReport) -> None:
        history.add_test(report.loss)
        print(report.info)

    activation = Activation(args.activation)
    hidden, layers = args.hidden, args.layers
    if args.load is not None:
        try:
            hidden, layers = parse_model_filename(args.load)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    trainer = FuzzyTrainer(hidden, layers, activation, on_train, on_test)
    if args.seed is not None:
        trainer.rng = np.random.default_rng(args.seed)
        trainer.create_network(hidden, layers, activation)
    trainer.train_batch_size = args.batch_size
    trainer.learning_rate = args.learning_rate
    trainer.log_interval = args.log_interval

    if args.load is not None:
        try:
            trainer.load_net(args.load)
        except (OSError, ValueError) as exc:
            print(f"error: cannot load {args.load}: {exc}", file=sys.stderr)
            return 1

    if args.command == "network":
        for line in trainer.str_network:
            print(line)
        return 0

    if args.command == "tip":
        fuzzy_tip, model_tip = trainer.test_model(args.price, args.time, args.quality)
        print(f"Test: Fuzzy={fuzzy_tip:,.2f} Model={model_tip:,.2f}")
        if args.plot is not None:
            plot_memberships(trainer.rule, args.plot)
        return 0

    if args.command == "train":
        for line in trainer.str_network:
            print(line)
        finished = _run_interruptible(
            trainer, lambda: trainer.train_main(args.samples)
        )
        print(
            "Train Fuzzy-Rules: Model trained" if finished else "Training aborted"
        )
        if args.save is not None:
            target = model_filename(args.save, hidden, layers)
            trainer.save_net(target)
            print(f"Saved: {target}")
    else:
        trainer.test_main(args.test_samples)

    if args.plot is not None:
        try:
            plot_losses(history, args.plot)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())