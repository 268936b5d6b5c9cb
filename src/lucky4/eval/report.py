from __future__ import annotations
import logging
from dataclasses import asdict
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from lucky4.config import DEFAULT_CONFIG, FullConfig
from lucky4.rules.engine import analyze_performance, get_win_probabilities
from lucky4.rules.fsm import GameStateManager

logger = logging.getLogger(__name__)

def simulate_games(n_games: int, manager: GameStateManager) -> pd.DataFrame:
    """Play n_games with random player picks drawn from the manager's own generator."""
    rows = []
    for g in range(n_games):
        s = manager.create_game_state(f"sim-{g}", game_id=str(g))
        s = manager.play_game(s, manager.generator.generate_numbers())
        rows.append({
            "game": g,
            "player_numbers": list(s.player_numbers),
            "lucky_numbers": list(s.lucky_numbers),
            "matches": s.matches,
            "score": s.score,
            "prize_tier": s.result.prize_tier,
        })
    return pd.DataFrame(rows, columns=["game", "player_numbers", "lucky_numbers",
                                       "matches", "score", "prize_tier"])

def tier_table(sims: pd.DataFrame, cfg: FullConfig = DEFAULT_CONFIG) -> pd.DataFrame:
    odds = get_win_probabilities(cfg)
    order = [t.matches for t in odds]
    tbl = pd.DataFrame({
        "prize_tier": [t.prize_tier for t in odds],
        "theoretical": [t.probability for t in odds],
    }, index=pd.Index(order, name="matches"))
    share = sims["matches"].value_counts(normalize=True) if len(sims) else pd.Series(dtype=float)
    tbl["simulated"] = share.reindex(order).fillna(0.0).to_numpy()
    tbl["abs_diff"] = (tbl["simulated"] - tbl["theoretical"]).abs()
    return tbl

def plot_tier_bars(tbl: pd.DataFrame, out_png: Path) -> None:
    ax = tbl[["theoretical", "simulated"]].plot.bar(figsize=(6, 4))
    ax.set_xlabel("matches"); ax.set_ylabel("share"); ax.set_title("Prize tiers: theoretical vs simulated")
    plt.tight_layout(); plt.savefig(out_png); plt.close()

def write_report(sims: pd.DataFrame, out: str | Path, cfg: FullConfig = DEFAULT_CONFIG,
                 plot: bool = True) -> Path:
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)
    tbl = tier_table(sims, cfg)
    perf = analyze_performance(sims[["matches", "score"]].to_dict("records"), cfg)

    png = out.with_suffix(".png")
    if plot:
        plot_tier_bars(tbl, png)

    with open(out, "w") as f:
        f.write("# Lucky 4 Simulation Report\n\n")
        f.write(f"- Games: **{len(sims):,}**\n")
        f.write(f"- Range: {cfg.numbers.min_value}-{cfg.numbers.max_value}, "
                f"{cfg.numbers.numbers_per_game} numbers per game\n\n")

        f.write("## Prize tiers\n\n")
        f.write(tbl.round(4).to_string() + "\n\n")
        if plot:
            f.write(f"![Prize tiers]({png.name})\n\n")

        f.write("## Performance\n\n")
        f.write(pd.Series(asdict(perf)).round(4).to_string() + "\n")
    logger.info("Wrote report for %d games to %s", len(sims), out)
    return out
