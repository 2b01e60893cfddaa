from __future__ import annotations

from herd_engine.breeding import descendant_birth_months, descendants, generate_herd


def test_one_year_horizon_has_only_the_purchased_pair():
    herd = generate_herd(12, 1)
    assert [a.id for a in herd] == ["U1A", "U1B"]
    assert [a.birth_month for a in herd] == [0, 6]
    assert descendants(herd) == []


def test_five_year_herd_birth_calendar():
    herd = generate_herd(60, 1)
    births = {a.id: a.birth_month for a in herd}
    assert births == {
        "U1A": 0,
        "U1B": 6,
        "U1A_C1": 32,
        "U1B_C1": 38,
        "U1A_C2": 44,
        "U1B_C2": 50,
        "U1A_C3": 56,
    }
    assert [a.birth_month for a in herd] == sorted(a.birth_month for a in herd)
    assert all(a.parent_id in {"U1A", "U1B"} for a in descendants(herd))


def test_generations_continue_past_the_first():
    herd = generate_herd(70, 1)
    grandchild = next(a for a in herd if a.id == "U1A_C1_C1")
    assert grandchild.generation == 2
    assert grandchild.birth_month == 64
    assert grandchild.parent_id == "U1A_C1"


def test_each_unit_gets_its_own_ids():
    herd = generate_herd(60, 2)
    assert len(herd) == 14
    assert {a.unit for a in herd} == {1, 2}
    assert "U2B_C1" in {a.id for a in herd}


def test_seed_age_counts_purchase_age():
    seed = generate_herd(12, 1)[0]
    assert seed.age_at(12) == 72
    assert descendant_birth_months(0, 32) == []
    assert descendant_birth_months(0, 45) == [32, 44]
