# fuzzytip

`fuzzytip` pairs a hand-written fuzzy rule base for choosing a restaurant tip
with a small feed-forward neural network, written with numpy, that learns to
reproduce it.

The rule base takes three inputs:

- **price** of the meal, 15 to 50
- **waiting time** in minutes, 15 to 60
- **quality** of the service, 0 to 1

Each input gets a triangular *low / mid / high* membership. Twenty-seven
min-combined rules feed seven output singletons, from "very very low" to
"very very high", placed evenly on 0 to 1. Each singleton is scored by the
strongest rule that feeds it, and the weighted average of the singleton
positions gives one tip score between 0 and 1.

## Installation

```
pip install .
```

Run `pip install .[test]` to get the test dependencies as well.

## Using the rules

```python
from fuzzytip.rules import FuzzyRule, triangle_membership

rule = FuzzyRule()
tip = rule.apply_rules(price=20.0, wtime=18.0, quality=0.9)
features = rule.normalize_model_input(20.0, 18.0, 0.9)  # float32 array of 3

m = triangle_membership(0.25, 1.0)   # Membership(high=..., mid=..., low=...)
```

`FuzzyRule` keeps the inputs and result of its last evaluation
(`last_price`, `last_time`, `last_quality`, `last_result`) and the singleton
positions and scores (`scores_pos`, `scores_show`). It also holds sampled
membership curves for each input (`price_curve`, `time_curve`,
`quality_curve`), 100 points each by default.

`fuzzytip.dataset.FuzzyDataset(length, rng)` draws uniformly random
situations and labels them with the rule base. It can be indexed and yields
stacked `(inputs, targets)` batches in order from `batches(batch_size)`.

## Training a network

`fuzzytip.network.Network` has one linear layer from 3 inputs to the hidden
width, then `layers` further hidden layers, each followed by one of the
activations in `fuzzytip.network.Activation` (relu, elu, leaky_relu, gelu,
tanh, sigmoid), and a linear output of one value. `Adam` updates its
parameters from the gradients returned by `loss_and_gradients`.

`fuzzytip.trainer.FuzzyTrainer` wraps a network, trains it with Adam on a
fresh random dataset and tests it against another. Progress is passed to
callbacks as `ProgressReport` values; setting `abort_train` stops training
after the current batch.

```python
from fuzzytip.network import Activation
from fuzzytip.trainer import FuzzyTrainer

trainer = FuzzyTrainer(9, 2, Activation.RELU,
                       on_train_progress=print, on_test_progress=print)
losses = trainer.train_main(10000)   # loss of every batch
errors = trainer.test_main(100)      # root loss of every test sample
fuzzy_tip, model_tip = trainer.test_model(30.0, 25.0, 0.7)
```

The trainer's defaults are a batch size of 16, a learning rate of 0.001, one
epoch and a progress report every 5 batches; change them through
`train_batch_size`, `learning_rate`, `iterations` and `log_interval`.

`save_net` and `load_net` store and reload the weights in numpy's `.npz`
format; loading checks that the stored shapes match the current network.
The helpers in `fuzzytip.cli` name model files `Model_H_<hidden>_L_<layers>.pt`:
`model_filename` builds such a path and `parse_model_filename` reads the
hidden width and layer count back.

## Plots

`fuzzytip.plots.plot_memberships` draws the membership curves, marks the last
evaluated inputs and draws the singleton scores. `fuzzytip.plots.plot_losses`
draws the training losses and test errors kept in a
`fuzzytip.history.PlotHistory`. Both write an image file to the given path
and return the matplotlib figure.

## Command line

```
fuzzytip --help
```

The `fuzzytip` command has four sub-commands:

- `fuzzytip network` prints the network's modules and parameter counts.
- `fuzzytip train [--samples N] [--save DIR] [--plot FILE]` trains on
  1000 to 100000 samples (default 10000). Ctrl-C aborts training. `--save`
  writes `Model_H_<hidden>_L_<layers>.pt` into the directory.
- `fuzzytip test [--test-samples N] [--plot FILE]` tests on 10 to 1000
  samples (default 100).
- `fuzzytip tip PRICE TIME QUALITY [--plot FILE]` prints the fuzzy tip and
  the network's tip; `--plot` draws the memberships.

All of them take `--hidden` (3–100, default 9), `--layers` (1–10, default 2),
`--activation`, `--batch-size` (1–100, default 16), `--learning-rate`
(0.00001–0.01, default 0.001), `--log-interval` (1–1000, default 5), `--seed`
and `--load FILE`. With `--load`, the network shape is taken from the file
name. For `train` and `test`, `--plot` writes the loss chart.

## What it does not do

There is no interactive window: charts are only written to image files, and
the inputs are given on the command line rather than moved with sliders. A
trained network is not kept between runs unless it is saved with
`train --save` and given back with `--load`.