"""
Light-up Puzzle - Interactive Demo

Run with: streamlit run app/demo.py
"""

import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Optional

from lightgame import (
    DIRECTIONS,
    Direction,
    LightGame,
    LightGameSolver,
    SolutionTracker,
    TileState,
    augment_randomly,
    format_dirs,
    load_from_hex_string,
    save_to_hex_string,
)
from lightgame.analysis import format_solutions

TILE_STYLE = {
    TileState.OFF: ("O", "#aa0000"),
    TileState.ON: ("X", "#00aa00"),
    TileState.BLOCKED: ("#", "#666666"),
}

# Cap on augmentation rounds so the page never hangs on an impossible request.
AUGMENT_ATTEMPT_BUDGET = 2000


def render_board_html(game: LightGame, winning: Optional[set] = None) -> str:
    """Render the board as an HTML table; the cursor is drawn as an orange '*'."""
    cell_size = 26 if game.width < 10 else 20
    winning = winning or set()

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'
    for y in range(1, game.height + 1):
        html += "<tr>"
        for x in range(1, game.width + 1):
            if (x, y) == (game.x, game.y):
                text, bg = "*", "#ffa500"
            else:
                text, bg = TILE_STYLE[game.at(x, y)]
            border = "3px solid #daa520" if (x, y) in winning else "1px solid #999"
            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: #ffffff;
                font-weight: bold;
            ">{text}</td>'''
        html += "</tr>"
    html += "</table></div>"
    return html


def render_stars(tracker: SolutionTracker) -> str:
    """Found winning starts as gold stars, missing ones as grey stars."""
    total = tracker.total_count()
    if total == 0:
        return "<span style='color: #aa0000;'>&#10060; This layout is unsolvable.</span>"
    found = tracker.found_count()
    return (
        f"<span style='color: #daa520; font-size: 22px;'>{'&#9733;' * found}</span>"
        f"<span style='color: #aaaaaa; font-size: 22px;'>{'&#9733;' * (total - found)}</span>"
    )


def set_game(game: LightGame) -> None:
    """Install a new layout and recompute its winning starts."""
    st.session_state.game = game
    st.session_state.tracker = SolutionTracker()
    st.session_state.tracker.recompute_from_game(game)


def after_move(game: LightGame) -> None:
    """Credit a win to the tracker."""
    if game.has_started() and game.valid_dirs() == Direction.NONE and game.have_won():
        if game.last_start is not None:
            st.session_state.tracker.report_solution(game.last_start)


def handle_tile(game: LightGame, x: int, y: int, block_mode: bool) -> None:
    if game.has_started():
        return
    if block_mode:
        if game.set_blocked(x, y):
            set_game(game)
    elif game.start(x, y):
        after_move(game)


def main():
    st.set_page_config(page_title="Light-up Puzzle", page_icon="💡", layout="wide")

    st.title("Light-up Puzzle")
    st.markdown("""
    Switch all unlit tiles (red 'O') on (green 'X') by sliding in straight lines.
    """)

    # Sidebar configuration
    st.sidebar.header("Layout Configuration")
    height = st.sidebar.slider("Height", 1, 15, 5)
    width = st.sidebar.slider("Width", 1, 15, 7)
    max_rand = height * width - 1
    if max_rand > 0:
        rand_min, rand_max = st.sidebar.slider(
            "Random blocks", 0, max_rand, (min(3, max_rand), min(6, max_rand))
        )
    else:
        rand_min = rand_max = 0
    aug_count = st.sidebar.number_input("Augment count", min_value=1, value=3)
    fast_actions = st.sidebar.checkbox("Auto-take forced actions", value=True)
    seed = st.sidebar.number_input("Seed (0 = random)", min_value=0, value=0)

    if "rng" not in st.session_state or st.session_state.get("seed") != seed:
        st.session_state.rng = random.Random(seed or None)
        st.session_state.seed = seed
    rng: random.Random = st.session_state.rng

    if "game" not in st.session_state:
        set_game(LightGame(height, width))

    game: LightGame = st.session_state.game
    tracker: SolutionTracker = st.session_state.tracker

    col1, col2 = st.columns([3, 1])

    with col1:
        st.subheader("Board")

        b1, b2, b3, b4, b5 = st.columns(5)
        with b1:
            if st.button("New (blank) layout", type="primary"):
                set_game(LightGame(height, width))
                st.rerun()
        with b2:
            if st.button("Random layout"):
                new_game = LightGame(height, width)
                n = rng.randint(rand_min, rand_max)
                with st.spinner("Searching for a solvable layout..."):
                    if n == 0 or augment_randomly(
                        new_game, n, rng, max_attempts=AUGMENT_ATTEMPT_BUDGET
                    ):
                        set_game(new_game)
                        st.rerun()
                    else:
                        st.warning("No solvable layout found; try fewer blocks.")
        with b3:
            if st.button("Random augment"):
                if game.has_started():
                    st.warning("Restart the layout before augmenting it.")
                else:
                    with st.spinner("Augmenting layout..."):
                        if augment_randomly(
                            game, int(aug_count), rng, max_attempts=AUGMENT_ATTEMPT_BUDGET
                        ):
                            set_game(game)
                            st.rerun()
                        else:
                            st.warning("Cannot augment this layout by that many blocks.")
        with b4:
            if st.button("(Re)start layout"):
                game.reset()
                st.rerun()
        with b5:
            if st.button("From same start", disabled=game.last_start is None):
                game.restart()
                st.rerun()

        block_mode = st.toggle("Block tiles on click (layout mode)", value=False)

        # Tile grid
        for y in range(1, game.height + 1):
            cols = st.columns(game.width)
            for x in range(1, game.width + 1):
                with cols[x - 1]:
                    if (x, y) == (game.x, game.y):
                        label = "*"
                    else:
                        label = TILE_STYLE[game.at(x, y)][0]
                    if st.button(label, key=f"tile_{x}_{y}", use_container_width=True):
                        handle_tile(game, x, y, block_mode)
                        st.rerun()

        st.markdown(
            render_board_html(game, set(tracker.found_solutions())),
            unsafe_allow_html=True,
        )

        # Direction controls
        if game.has_started():
            valid = game.valid_dirs()
            dir_cols = st.columns(4)
            labels = {Direction.UP: "↑ Up", Direction.DOWN: "↓ Down",
                      Direction.LEFT: "← Left", Direction.RIGHT: "→ Right"}
            for col, d in zip(dir_cols, DIRECTIONS):
                with col:
                    if st.button(labels[d], disabled=d not in valid, key=f"dir_{d.name}"):
                        if fast_actions:
                            game.move_fast(d)
                        else:
                            game.move(d)
                        after_move(game)
                        st.rerun()

            if valid == Direction.NONE:
                if game.have_won():
                    st.success("Victory!")
                else:
                    st.error("Game over")
            else:
                st.info(f"Valid directions: {format_dirs(valid)}")
        else:
            st.caption("[layout mode] Click an unlit tile to start.")

    with col2:
        st.subheader("Progress")
        st.markdown(render_stars(tracker), unsafe_allow_html=True)
        found = tracker.found_solutions()
        if found:
            st.text("Found starts: " + " ".join(f"[{x}, {y}]" for x, y in found))

        st.markdown("---")
        st.subheader("Layout Code")
        st.code(save_to_hex_string(game))
        code = st.text_input("Load code")
        if st.button("Load"):
            loaded = load_from_hex_string(code.strip())
            if loaded is None:
                st.error(f"Error during loading of '{code}'.")
            else:
                set_game(loaded)
                st.rerun()

        st.markdown("---")
        with st.expander("Hint"):
            if st.button("Show solutions"):
                solver = LightGameSolver(game)
                if not solver.is_solvable(collect=True):
                    st.text("This layout is not solvable.")
                else:
                    st.text(format_solutions(solver.solutions))


if __name__ == "__main__":
    main()
