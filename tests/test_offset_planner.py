"""Tests for the descending, block-grouped page plan."""

import math

import pytest

from services.store_export.OffsetPlanner import OffsetPlanner

TOTALS = [0, 1, 99, 100, 101, 250, 999, 1000, 1001, 1100, 2500, 10000, 12345]


@pytest.fixture
def planner():
    return OffsetPlanner()


class TestStartOffset:

    @pytest.mark.parametrize("total,expected", [(0, 0), (1, 100), (99, 100), (100, 100), (250, 300), (1000, 1000), (1001, 1100)])
    def test_rounds_up_to_page(self, planner, total, expected):
        assert planner.get_start_offset(total) == expected

    @pytest.mark.parametrize("total,expected", [(0, 0), (1, 0), (100, 0), (250, 200), (300, 200), (1001, 1000)])
    def test_exact_pages_starts_one_page_lower(self, total, expected):
        assert OffsetPlanner(exact_pages=True).get_start_offset(total) == expected

    def test_negative_total_is_rejected(self, planner):
        with pytest.raises(ValueError):
            planner.get_start_offset(-1)


class TestThousandFloor:

    @pytest.mark.parametrize("offset,expected", [(0, 0), (100, 0), (300, 0), (1000, 0), (1100, 1000), (2000, 1000), (2500, 2000)])
    def test_floor(self, planner, offset, expected):
        assert planner.get_thousand_floor(offset) == expected


class TestBlocks:

    def test_example_total_250_is_one_block_of_four_pages(self, planner):
        assert planner.plan(250) == [[300, 200, 100, 0]]

    def test_zero_total_requests_offset_zero_once(self, planner):
        assert planner.plan(0) == [[0]]

    def test_block_starting_on_boundary_reaches_previous_boundary(self, planner):
        assert planner.plan(1000) == [[1000, 900, 800, 700, 600, 500, 400, 300, 200, 100, 0]]

    def test_block_split_above_boundary(self, planner):
        assert planner.plan(1100) == [
            [1100, 1000],
            [900, 800, 700, 600, 500, 400, 300, 200, 100, 0],
        ]

    def test_blocks_are_generated_lazily(self, planner):
        blocks = planner.iter_blocks(2500)
        assert next(blocks) == [2500, 2400, 2300, 2200, 2100, 2000]
        assert next(blocks)[0] == 1900

    @pytest.mark.parametrize("total", TOTALS)
    def test_pages_cover_every_item(self, planner, total):
        offsets = [offset for block in planner.plan(total) for offset in block]

        assert offsets == sorted(offsets, reverse=True)
        assert all(a - b == 100 for a, b in zip(offsets, offsets[1:]))
        assert offsets.count(0) == 1
        assert len(offsets) == math.ceil(total / 100) + 1
        pages = set(offsets)
        assert all((index // 100) * 100 in pages for index in range(total))

    @pytest.mark.parametrize("total", TOTALS)
    def test_block_pages_stay_between_floor_and_start(self, planner, total):
        for block in planner.plan(total):
            floor = planner.get_thousand_floor(block[0])
            assert all(floor <= offset <= block[0] for offset in block)
            assert block[-1] == floor

    @pytest.mark.parametrize("total", TOTALS)
    def test_exact_pages_requests_no_page_past_the_end(self, total):
        planner = OffsetPlanner(exact_pages=True)
        offsets = [offset for block in planner.plan(total) for offset in block]

        assert len(offsets) == max(1, math.ceil(total / 100))
        assert all(offset < total for offset in offsets if total)
        assert all((index // 100) * 100 in offsets for index in range(total))
