from lightgame import SolutionTracker


def test_every_tile_of_open_board_is_a_winning_start(open_2x3):
    tracker = SolutionTracker()
    tracker.recompute_from_game(open_2x3)
    assert tracker.total_count() == 6
    assert tracker.found_count() == 0
    assert not tracker.is_complete()


def test_unsolvable_layout_has_no_starts(corners_3x3):
    tracker = SolutionTracker()
    tracker.recompute_from_game(corners_3x3)
    assert tracker.total_count() == 0
    assert not tracker.report_solution((2, 2))
    assert not tracker.is_complete()


def test_report_solution(open_2x3):
    tracker = SolutionTracker()
    tracker.recompute_from_game(open_2x3)

    assert tracker.report_solution((2, 1))
    assert not tracker.report_solution((2, 1))
    assert not tracker.report_solution((4, 1))
    assert tracker.report_solution((1, 1))
    assert tracker.found_solutions() == [(2, 1), (1, 1)]
    assert tracker.found_count() == 2


def test_recompute_forgets_found_starts(open_2x3):
    tracker = SolutionTracker()
    tracker.recompute_from_game(open_2x3)
    for y in (1, 2):
        for x in (1, 2, 3):
            assert tracker.report_solution((x, y))
    assert tracker.is_complete()

    open_2x3.set_blocked(2, 1)
    tracker.recompute_from_game(open_2x3)
    assert tracker.found_solutions() == []
    assert tracker.total_count() < 6
