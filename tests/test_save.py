import numpy as np
import pandas as pd
import pytest

from conftest import WET_GRASS_CPT, make_gaussian_set
from fuzzycpt.core.cpt import CPT
from fuzzycpt.utils.save import cpt_to_frame, save_cpt_csv, save_membership_curves, state_names


def test_state_names():
    assert state_names(2) == ["FALSE", "TRUE"]
    assert state_names(4) == ["GOOD", "PROBABLY_GOOD", "PROBABLY_BAD", "BAD"]


def test_cpt_to_frame():
    df = cpt_to_frame(CPT(WET_GRASS_CPT), [2, 2], 2, ["Sprinkler", "Rainy"])
    assert list(df.columns) == ["Sprinkler", "Rainy", "FALSE", "TRUE"]
    assert len(df) == 4
    assert df.loc[1, "Sprinkler"] == "TRUE" and df.loc[1, "Rainy"] == "FALSE"
    assert df.loc[0, "FALSE"] == pytest.approx(1 / 1.01)
    assert df.loc[3, "TRUE"] == pytest.approx(1 / 1.01)
    assert np.allclose(df[["FALSE", "TRUE"]].sum(axis=1), 1.0)


def test_cpt_to_frame_size_mismatch():
    with pytest.raises(ValueError):
        cpt_to_frame(CPT(6), [2, 2], 2)


def test_save_cpt_csv(tmp_path):
    path = save_cpt_csv(CPT(WET_GRASS_CPT), [2, 2], 2, name="WetGrass", folder=str(tmp_path))
    df = pd.read_csv(path)
    assert df.shape == (4, 4)
    assert list(df.columns) == ["parent_0", "parent_1", "FALSE", "TRUE"]


def test_save_membership_curves(tmp_path):
    universe = np.linspace(-1, 2, 31)
    path = save_membership_curves(make_gaussian_set("Sprinkler"), universe, name="Sprinkler", folder=str(tmp_path))
    df = pd.read_csv(path)
    assert list(df.columns) == ["x", "FALSE", "TRUE"]
    assert len(df) == 31
    assert df["FALSE"].max() == pytest.approx(1.0)
