import pytest

from MarchingCubes.tables import (
    TRIANGLE_CONNECTION,
    EDGE_TABLE,
    CORNERS,
    EDGE_CONNECTION,
    SENTINEL,
    TABLE_WIDTH,
    MAX_TRIANGLES,
)


def used_edges(index):
    return {e for e in TRIANGLE_CONNECTION[index] if e != SENTINEL}


def test_table_shape():
    assert len(TRIANGLE_CONNECTION) == 256
    assert all(len(entry) == TABLE_WIDTH for entry in TRIANGLE_CONNECTION)
    assert len(EDGE_TABLE) == 256
    assert 3 * MAX_TRIANGLES < TABLE_WIDTH


def test_table_is_immutable():
    with pytest.raises(TypeError):
        TRIANGLE_CONNECTION[0] = (0,) * TABLE_WIDTH
    with pytest.raises(TypeError):
        TRIANGLE_CONNECTION[1][0] = 3


@pytest.mark.parametrize("index", range(256))
def test_entries_are_front_packed(index):
    entry = TRIANGLE_CONNECTION[index]
    n_used = sum(1 for e in entry if e != SENTINEL)
    assert n_used % 3 == 0
    assert n_used <= 3 * MAX_TRIANGLES
    assert all(e != SENTINEL for e in entry[:n_used])
    assert all(e == SENTINEL for e in entry[n_used:])


@pytest.mark.parametrize("index", range(256))
def test_entries_match_corner_signs(index):
    crossed = 0
    for edge, (a, b) in enumerate(EDGE_CONNECTION):
        if bool(index & (1 << a)) != bool(index & (1 << b)):
            crossed |= 1 << edge
    assert EDGE_TABLE[index] == crossed
    assert used_edges(index) == {e for e in range(12) if crossed & (1 << e)}


def test_edges_join_adjacent_corners():
    assert len(CORNERS) == 8
    assert len(EDGE_CONNECTION) == 12
    for a, b in EDGE_CONNECTION:
        diff = [abs(p - q) for p, q in zip(CORNERS[a], CORNERS[b])]
        assert sorted(diff) == [0, 0, 1]


def test_triangles_are_not_degenerate():
    for entry in TRIANGLE_CONNECTION:
        for i in range(MAX_TRIANGLES):
            triangle = entry[3 * i : 3 * i + 3]
            if triangle[0] == SENTINEL:
                break
            assert len(set(triangle)) == 3


if __name__ == "__main__":
    test_table_shape()
    test_edges_join_adjacent_corners()
    test_triangles_are_not_degenerate()
