import shutil

import pytest

from fuzzytip.cli import main, model_filename, parse_model_filename
from fuzzytip.rules import FuzzyRule


def test_model_filename_format(tmp_path):
    path = model_filename(tmp_path, 9, 2)
    assert path.name == "Model_H_9_L_2.pt"
    assert path.parent == tmp_path


@pytest.mark.parametrize("hidden,layers", [(3, 1), (9, 2), (100, 10)])
def test_filename_round_trip(tmp_path, hidden, layers):
    assert parse_model_filename(model_filename(tmp_path, hidden, layers)) == (
        hidden,
        layers,
    )


def test_parse_windows_style_path():
    assert parse_model_filename("c:\\models\\Model_H_12_L_4.pt") == (12, 4)


@pytest.mark.parametrize("name", ["model.pt", "Model_H_x_L_2.pt", "Model_H_3.pt"])
def test_parse_rejects_other_names(name):
    with pytest.raises(ValueError):
        parse_model_filename(name)


def test_network_command_describes_network(capsys):
    assert main(["network", "--hidden", "3", "--layers", "1", "--seed", "0"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Network: Sequential"
    assert out[-1].startswith("Number of Parameters: ")


def test_tip_command_reports_fuzzy_tip(capsys, tmp_path):
    plot = tmp_path / "fuzzy.png"
    code = main(["tip", "20", "30", "0.7", "--seed", "1", "--plot", str(plot)])
    assert code == 0
    expected = FuzzyRule().apply_rules(20.0, 30.0, 0.7)
    out = capsys.readouterr().out
    assert out.startswith(f"Test: Fuzzy={expected:,.2f} Model=")
    assert plot.stat().st_size > 0


def test_out_of_range_arguments_are_rejected():
    with pytest.raises(SystemExit):
        main(["tip", "10", "30", "0.5"])
    with pytest.raises(SystemExit):
        main(["train", "--samples", "10"])


def test_train_save_then_test_loaded(capsys, tmp_path):
    loss_plot = tmp_path / "loss.png"
    code = main(
        [
            "train", "--hidden", "3", "--layers", "1", "--samples", "1000",
            "--log-interval", "1000", "--seed", "2",
            "--save", str(tmp_path), "--plot", str(loss_plot),
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "Train Epoch: 1" in out
    assert "Train Fuzzy-Rules: Model trained" in out
    saved = model_filename(tmp_path, 3, 1)
    assert saved.exists()
    assert loss_plot.stat().st_size > 0

    code = main(["test", "--load", str(saved), "--test-samples", "10", "--seed", "3"])
    assert code == 0
    lines = [
        line for line in capsys.readouterr().out.splitlines()
        if line.startswith("Test: ")
    ]
    assert len(lines) == 10
    assert lines[0].startswith("Test: 0,  Median Error: ")


def test_load_with_mismatched_name_fails(capsys, tmp_path):
    assert main(
        ["train", "--hidden", "3", "--layers", "1", "--samples", "1000",
         "--log-interval", "1000", "--seed", "4", "--save", str(tmp_path)]
    ) == 0
    wrong = model_filename(tmp_path, 4, 1)
    shutil.copy(model_filename(tmp_path, 3, 1), wrong)
    capsys.readouterr()
    assert main(["network", "--load", str(wrong)]) == 1
    assert "cannot load" in capsys.readouterr().err


def test_load_with_bad_name_fails(capsys, tmp_path):
    assert main(["network", "--load", str(tmp_path / "weights.pt")]) == 1
    assert "not a model file name" in capsys.readouterr().err