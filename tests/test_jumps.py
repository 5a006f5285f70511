import numpy as np
import pytest
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import shortest_path

from complx.errors import ErrorCode, OutOfBoundsError
from complx.jumps import JumpOptimizer, ReadyJumpOptimizer


def _graph_distance(field_size, jump_length, start, target) -> int | None:
    """Shortest path length in the jump graph, computed by scipy."""
    width, height = field_size
    p, q = jump_length
    moves = [(p, q), (p, -q), (-p, q), (-p, -q), (q, p), (q, -p), (-q, p), (-q, -p)]
    adjacency = np.zeros((width * height, width * height))
    for x in range(width):
        for y in range(height):
            for dx, dy in moves:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height and (nx, ny) != (x, y):
                    adjacency[x * height + y, nx * height + ny] = 1

    dist = shortest_path(
        csr_matrix(adjacency),
        unweighted=True,
        indices=start[0] * height + start[1],
    )
    d = dist[target[0] * height + target[1]]
    return None if np.isinf(d) else int(d)


def test_rabbit_gets_from_a_to_b_properly():
    optimizer = JumpOptimizer((10, 10), (1, 1))
    jor = optimizer.find_min_jumps((0, 0), (2, 2))

    assert isinstance(jor, ReadyJumpOptimizer)
    assert jor.min_jumps == 2
    assert not optimizer.visited.any()


def test_rabbit_cannot_reach_b_from_a():
    optimizer = JumpOptimizer((5, 5), (3, 3))
    jor = optimizer.find_min_jumps((0, 0), (4, 4))

    assert jor.min_jumps is None
    assert "not possible" in jor.report()
    assert not optimizer.visited.any()


@pytest.mark.parametrize("target", [(5, 5), (6, 7), (0, 5), (5, 0)])
def test_rabbit_jump_outside_bounds_is_warned(target):
    optimizer = JumpOptimizer((5, 5), (3, 3))

    with pytest.raises(OutOfBoundsError) as exc_info:
        optimizer.find_min_jumps((0, 0), target)

    assert exc_info.value.code == ErrorCode.OUT_OF_BOUNDS
    assert not optimizer.visited.any()


def test_start_outside_bounds_is_rejected():
    with pytest.raises(OutOfBoundsError):
        JumpOptimizer((5, 5), (1, 2)).find_min_jumps((5, 0), (0, 0))


def test_start_equals_target_takes_no_jumps():
    jor = JumpOptimizer((3, 3), (1, 2)).find_min_jumps((1, 1), (1, 1))

    assert jor.min_jumps == 0
    assert "is 0." in jor.report()


def test_non_square_field():
    optimizer = JumpOptimizer((2, 6), (0, 1))
    jor = optimizer.find_min_jumps((0, 0), (1, 5))

    assert jor.min_jumps == 6
    assert optimizer.visited.shape == (2, 6)


@pytest.mark.parametrize(
    "field_size, jump_length, start, target",
    [
        ((3, 3), (1, 2), (0, 0), (1, 1)),
        ((3, 3), (1, 2), (0, 0), (2, 2)),
        ((4, 4), (1, 2), (0, 0), (3, 3)),
        ((4, 4), (1, 2), (0, 0), (1, 0)),
        ((4, 3), (1, 2), (3, 2), (0, 0)),
        ((4, 4), (1, 1), (0, 0), (3, 3)),
        ((4, 4), (1, 1), (0, 0), (0, 1)),
        ((5, 2), (0, 1), (0, 0), (4, 1)),
    ],
)
def test_matches_graph_shortest_path(field_size, jump_length, start, target):
    optimizer = JumpOptimizer(field_size, jump_length)
    jor = optimizer.find_min_jumps(start, target)

    assert jor.min_jumps == _graph_distance(field_size, jump_length, start, target)
    assert not optimizer.visited.any()


def test_optimizer_can_be_searched_again():
    optimizer = JumpOptimizer((4, 4), (1, 2))

    first = optimizer.find_min_jumps((0, 0), (3, 3))
    second = optimizer.find_min_jumps((0, 0), (0, 0))

    assert first.min_jumps == 2
    assert second.min_jumps == 0
    assert not optimizer.visited.any()


def test_visited_view_is_read_only():
    optimizer = JumpOptimizer((3, 3), (1, 2))

    with pytest.raises(ValueError):
        optimizer.visited[0, 0] = True


def test_report_is_stable():
    jor = JumpOptimizer((10, 10), (1, 1)).find_min_jumps((0, 0), (2, 2))
    text = jor.report()

    assert text == "> The minimum number of jumps done to go from point (0, 0) to point (2, 2) is 2."
    assert text == jor.report()


def test_points_given_as_lists():
    optimizer = JumpOptimizer((10, 10), (1, 1))
    jor = optimizer.find_min_jumps([0, 0], [2, 2])

    assert jor.min_jumps == 2
    assert jor.start == (0, 0)
    assert not optimizer.visited.any()
