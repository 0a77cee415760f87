"""Script to generate board visualizations.

Run from the project root:
    python scripts/generate_board_vis.py
"""

import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from catan_core.config import GameConfig
from catan_core.logging_config import configure_logging
from catan_data.generator import generate_standard_board
from catan_data.graph_vis import visualize_board
from catan_data.topology import get_board_stats
from catan_engine.game_engine import GameEngine


def generate_standard_board_vis(seed: int = 0):
    """Generate visualization of a freshly generated board."""
    print("Generating standard board...")
    board = generate_standard_board(rng=random.Random(seed))

    stats = get_board_stats(board)
    print(f"Board has {stats['num_tiles']} tiles, {stats['num_corners']} corners "
          f"and {stats['num_sides']} sides")
    print(f"Robber starts on {stats['robber_tile']}")

    output_path = project_root / "output" / "standard_board_before_setup.png"
    output_path.parent.mkdir(exist_ok=True)

    print(f"Generating visualization -> {output_path}")
    fig = visualize_board(
        board,
        title="Standard Board (Before Setup)",
        save_path=output_path,
        show=False,
    )
    print("Done!")
    return fig


def generate_after_setup_vis(seed: int = 0, num_players: int = 4):
    """Generate visualization of a board after a complete setup phase."""
    print(f"\nPlaying setup for {num_players} players...")
    engine = GameEngine(GameConfig(seed=seed))
    for i in range(num_players):
        engine.add_player(f"Player {i + 1}")
    engine.start_game()

    # Take the first legal action until play begins
    while engine.state.is_setup_phase():
        engine.step(engine.get_valid_actions()[0])

    for player in engine.state.players:
        print(f"  {player.summary()}")

    output_path = project_root / "output" / "board_after_setup.png"
    output_path.parent.mkdir(exist_ok=True)

    print(f"Generating visualization -> {output_path}")
    fig = visualize_board(
        engine.board,
        title="Board After Setup",
        save_path=output_path,
        show=False,
    )
    print("Done!")
    return fig


if __name__ == "__main__":
    import matplotlib
    matplotlib.use("Agg")  # Non-interactive backend
    configure_logging()

    generate_standard_board_vis()
    generate_after_setup_vis()

    print("\nVisualizations saved to output/ directory")
