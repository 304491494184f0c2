import pytest

from sovmetrics.secondary import (
    Accuracy,
    LooseOverlap,
    Sov94,
    Sov99,
    SovRefine,
    StrictOverlap,
    create_metrics,
)
from sovmetrics.segmentation import Normalization, Segmentation


def close(value):
    return pytest.approx(value, abs=0.0055)


REF_6DFR = "....HHHHHHHHHHH....EEEEHHHHHHH.........EEEE..........EEE..HHHHHH..........EEE...HHHHHHHHHH..EEEEEEE..............HHHEEEEEEEEE.........EEEEEEEE."
PRED_3DFR = "....HHHHHHHHH.....EEEEEHHHHHH.........EEEEE...........EEE..HHHHHHHHHH.....EEE...HHHHHH.HHH..EEEEEEE.......EE.....HHHEEEEEEEEEE....HHH.EEEEEEEE."
REF_IFDL = "....HHHHHHHHHH...........HHHHHHHHHHH......EEEE...EEEE....EE.....................HHHHH....HHHHHHHHHHHH...HHHH...HHHH.....HHHHH....."
PRED_21Z2 = "....HHHHHHHHHH...........HHHHHHHHHH.......EEE.....EEE....EE.....................HHH........HHHHHHHH.....HHHH.HHHHHH......HHH......"

OBSERVER = ".HHHHH..."
FIG_A1A = ["...HHHHHH", ".HHHH....", "HHH.HH..."]

PAIRS_REF = "..HHHHH."
PAIRS_PRED = [".HHHHH..", "...HHHHH", ".HHHHHH.", "..HHHHHH", "..HHHH..", "...HHHH."]

ZEMLA_REF = "CHHHHHHHHHHC"
ZEMLA_PRED = ["CHCHCHCHCHCC", "CCCHHHHHCCCC", "CHHHCHHHCHHC", "CHHCCHHHHHCC", "CCCHHHHHHCCC"]

LIU_PRED = [
    "CHCHCHCHCHCC",
    "CHHHCHHHCHHC",
    "CHHCCHHHHHCC",
    "CCCHHHHCCCCC",
    "CCCHHHHHCCCC",
    "CCCHHHHHHCCC",
    "CCCHHHHHHHCC",
    "CCCHHHHHHHHC",
]

TABLE2_REF = "AABBBBBBCCCCCCDD"
TABLE2_PRED = ["AAAAABBBCCCDDDDD", "AAAABBBBCCCCDDDD", "AAABBBBBCCCCCDDD", "AABBBBBBCCCCCDDD"]


def test_accuracy_fig3a():
    acc = Accuracy("Accuracy", REF_6DFR, PRED_3DFR, None)
    assert acc.calculate_all() == close(0.86)
    assert acc.calculate_class("H") == close(0.87)
    assert acc.calculate_class("E") == close(0.97)
    assert acc.calculate_class(".") == close(0.79)


def test_sov94_fig3a():
    sov = Sov94("Sov94", REF_6DFR, PRED_3DFR, False, True, None)
    assert sov.calculate_all() == close(0.97)
    assert sov.calculate_class("H") == close(0.96)
    assert sov.calculate_class("E") == close(0.98)
    assert sov.calculate_class(".") == close(0.97)


def test_accuracy_fig3b():
    acc = Accuracy("Accuracy", REF_IFDL, PRED_21Z2, None)
    assert acc.calculate_all() == close(0.9)
    assert acc.calculate_class("H") == close(0.82)
    assert acc.calculate_class("E") == close(0.80)
    assert acc.calculate_class(".") == close(0.97)


def test_sov94_fig3b():
    sov = Sov94("Sov94", REF_IFDL, PRED_21Z2, False, True, None)
    assert sov.calculate_all() == close(0.98)
    assert sov.calculate_class("H") == close(1.0)
    assert sov.calculate_class("E") == close(1.0)
    assert sov.calculate_class(".") == close(0.95)


@pytest.mark.parametrize("predicted, expected", zip(FIG_A1A, [0.38, 0.80, 0.73]))
def test_sov94_fig_a1a(predicted, expected):
    sov = Sov94("Sov94", OBSERVER, predicted, True, False, None)
    assert sov.calculate_class("H") == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(FIG_A1A, [1.0, 1.0, 0.0]))
def test_loose_overlap_fig_a1a(predicted, expected):
    loose = LooseOverlap("LooseOverlap", OBSERVER, predicted, None)
    assert loose.calculate_class("H") == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(FIG_A1A, [0.0, 1.0, 0.0]))
def test_strict_overlap_fig_a1a(predicted, expected):
    strict = StrictOverlap("StrictOverlap", OBSERVER, predicted, False, None)
    assert strict.calculate_class("H") == close(expected)


@pytest.mark.parametrize("predicted", PAIRS_PRED)
def test_strict_overlap_fig_a1b(predicted):
    strict = StrictOverlap("StrictOverlap", PAIRS_REF, predicted, False, None)
    assert strict.calculate_class("H") == close(1.0)


def test_sov99_fig1():
    sov = Sov99("Sov99", "CCEEECCCCCCEEEEEECCC", "CCCCCCCEEEEECCCEECCC", False, None, None)
    assert sov.calculate_class("E") == close(0.28)


@pytest.mark.parametrize("predicted, expected", zip(ZEMLA_PRED, [0.125, 0.632, 0.406, 0.523, 0.806]))
def test_sov99_zemla_table1(predicted, expected):
    sov = Sov99("Sov99", ZEMLA_REF, predicted, False, None, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(ZEMLA_PRED, [0.125, 0.465, 0.313, 0.386, 0.556]))
def test_sov99_zero_delta_zemla_table1(predicted, expected):
    sov = Sov99("Sov99", ZEMLA_REF, predicted, True, None, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(ZEMLA_PRED, [0.958, 0.882, 1.5, 1.292, 0.889]))
def test_sov94_zemla_table1(predicted, expected):
    sov = Sov94("Sov94", ZEMLA_REF, predicted, False, False, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(ZEMLA_PRED, [0.542, 0.465, 0.833, 0.708, 0.556]))
def test_sov94_zero_delta_zemla_table1(predicted, expected):
    sov = Sov94("Sov94", ZEMLA_REF, predicted, True, False, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(ZEMLA_PRED, [0.583, 0.583, 0.833, 0.75, 0.667]))
def test_accuracy_zemla_table1(predicted, expected):
    acc = Accuracy("Q3", ZEMLA_REF, predicted, None)
    assert acc.calculate_all() == close(expected)


@pytest.mark.parametrize(
    "predicted, expected",
    zip(LIU_PRED, [0.583, 0.833, 0.75, 0.50, 0.583, 0.667, 0.75, 0.833]),
)
def test_accuracy_liu_table1(predicted, expected):
    acc = Accuracy("Q3", ZEMLA_REF, predicted, None)
    assert acc.calculate_all() == close(expected)


@pytest.mark.parametrize(
    "predicted, expected",
    zip(LIU_PRED, [0.125, 0.406, 0.523, 0.544, 0.632, 0.806, 0.903, 0.944]),
)
def test_sov99_liu_table1(predicted, expected):
    sov = Sov99("Q3", ZEMLA_REF, predicted, False, None, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize(
    "predicted, expected",
    zip(LIU_PRED, [0.149, 0.371, 0.464, 0.459, 0.567, 0.678, 0.797, 0.937]),
)
def test_sov_refine_liu_table1(predicted, expected):
    sov = SovRefine("Q3", ZEMLA_REF, predicted, False, 1.0, None, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(TABLE2_PRED, [0.625, 0.75, 0.875, 0.938]))
def test_accuracy_liu_table2(predicted, expected):
    acc = Accuracy("Q4", TABLE2_REF, predicted, None)
    assert acc.calculate_all() == close(expected)


@pytest.mark.parametrize("predicted, expected", zip(TABLE2_PRED, [0.65, 0.938, 1.0, 1.0]))
def test_sov99_liu_table2(predicted, expected):
    sov = Sov99("Sov99", TABLE2_REF, predicted, False, None, None)
    assert sov.calculate_all() == close(expected)


@pytest.mark.parametrize(
    "lambda_, expected",
    [
        (1.0, [0.807, 0.925, 1.0, 1.0]),
        (0.5, [0.641, 0.85, 0.961, 0.981]),
        (0.1, [0.508, 0.67, 0.851, 0.925]),
    ],
)
def test_sov_refine_liu_table2(lambda_, expected):
    results = [
        SovRefine("SovRefine", TABLE2_REF, predicted, False, lambda_, None, None).calculate_all()
        for predicted in TABLE2_PRED
    ]
    assert results == [close(value) for value in expected]


def test_shared_segmentation_gives_same_results():
    segmentation = Segmentation(ZEMLA_REF, ZEMLA_PRED[1])
    normalization = Normalization(segmentation)
    shared = Sov99("Sov99", ZEMLA_REF, ZEMLA_PRED[1], False, normalization, segmentation)
    alone = Sov99("Sov99", ZEMLA_REF, ZEMLA_PRED[1], False, None, None)
    assert shared.calculate_all() == alone.calculate_all()
    assert shared.calculate_class("H") == alone.calculate_class("H")


def test_classes_follow_reference_order():
    acc = Accuracy("Q3", ZEMLA_REF, ZEMLA_PRED[0], None)
    assert acc.classes == ("C", "H")


def test_identical_sequences_score_one():
    sequence = "HHHEEE...HHH"
    metrics = [
        Accuracy("a", sequence, sequence, None),
        StrictOverlap("s", sequence, sequence, False, None),
        Sov94("94", sequence, sequence, False, False, None),
        Sov99("99", sequence, sequence, False, None, None),
        SovRefine("r", sequence, sequence, False, 1.0, None, None),
        LooseOverlap("l", sequence, sequence, None),
    ]
    for metric in metrics:
        assert metric.calculate_all() == pytest.approx(1.0)
        for ss_class in metric.classes:
            assert metric.calculate_class(ss_class) == pytest.approx(1.0)


def test_absent_class_scores_zero_for_length_based_metrics():
    acc = Accuracy("Q3", ZEMLA_REF, ZEMLA_PRED[0], None)
    assert acc.calculate_class("E") == 0.0


def test_absent_class_is_nan_for_normalized_metrics():
    sov = Sov99("Sov99", ZEMLA_REF, ZEMLA_PRED[0], False, None, None)
    value = sov.calculate_class("E")
    assert str(value) == "nan"
    assert value == pytest.approx(float("nan"), nan_ok=True)


def test_empty_sequence_rejected():
    with pytest.raises(ValueError, match="empty"):
        Accuracy("Q3", "", "", None)


def test_length_mismatch_rejected():
    with pytest.raises(ValueError, match="same length"):
        Sov94("Sov94", "HHH", "HH", False, False, None)


def test_create_metrics_all_names_and_order():
    metrics = create_metrics("all", ZEMLA_REF, ZEMLA_PRED[2], 1.0, False)
    assert [metric.name for metric in metrics] == [
        "LooseOverlap",
        "StrictOverlap",
        "Accuracy",
        "SOV_94",
        "SOV_99",
        "SOV_refine",
    ]
    assert metrics[4].calculate_all() == close(0.406)
    assert metrics[2].calculate_all() == close(0.833)


@pytest.mark.parametrize(
    "name, expected_name",
    [
        ("accuracy", "Accuracy"),
        ("SOVrefine", "SOV_refine"),
        ("sov99", "SOV_99"),
        ("Sov94", "SOV_94"),
        ("strictoverlap", "StrictOverlap"),
        ("LooseOverlap", "LooseOverlap"),
    ],
)
def test_create_metrics_single(name, expected_name):
    metrics = create_metrics(name, ZEMLA_REF, ZEMLA_PRED[0], 1.0, False)
    assert [metric.name for metric in metrics] == [expected_name]


def test_create_metrics_matches_standalone_values():
    (sov,) = create_metrics("sovrefine", TABLE2_REF, TABLE2_PRED[0], 0.5, False)
    assert sov.calculate_all() == close(0.641)


def test_create_metrics_invalid_name():
    with pytest.raises(ValueError, match="Metric choice is invalid"):
        create_metrics("q8", ZEMLA_REF, ZEMLA_PRED[0], 1.0, False)