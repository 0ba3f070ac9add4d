from __future__ import annotations

import pandas as pd


POINTS = {"win": 1.0, "draw": 0.5, "loss": 0.0}


def per_engine_rows(df: pd.DataFrame) -> pd.DataFrame:
    """
    Reshape one-row-per-game results into one row per (game, engine).
    """
    rows = []
    for rec in df.itertuples(index=False):
        for side, opp in (("p1", "p2"), ("p2", "p1")):
            if rec.winner == "draw":
                result = "draw"
            else:
                result = "win" if rec.winner == side else "loss"
            p1_first = rec.p1_colour == "yellow"
            rows.append({
                "game": rec.game,
                "name": getattr(rec, f"{side}_name"),
                "opponent": getattr(rec, f"{opp}_name"),
                "moved_first": p1_first if side == "p1" else not p1_first,
                "result": result,
                "points": POINTS[result],
                "moves": getattr(rec, f"{side}_moves", 0),
                "time_ms": getattr(rec, f"{side}_ms", 0),
            })
    return pd.DataFrame(rows)


def standings(df: pd.DataFrame) -> pd.DataFrame:
    long = per_engine_rows(df)
    if long.empty:
        return pd.DataFrame(columns=["name", "games", "wins", "draws", "losses", "points", "ppg", "moves", "avg_ms_per_move"])

    g = long.groupby("name")
    out = pd.DataFrame({
        "games": g.size(),
        "wins": g["result"].apply(lambda s: int((s == "win").sum())),
        "draws": g["result"].apply(lambda s: int((s == "draw").sum())),
        "losses": g["result"].apply(lambda s: int((s == "loss").sum())),
        "points": g["points"].sum(),
        "moves": g["moves"].sum(),
        "time_ms": g["time_ms"].sum(),
    }).reset_index()

    out["ppg"] = out["points"] / out["games"]
    out["avg_ms_per_move"] = (out["time_ms"] / out["moves"].where(out["moves"] > 0)).fillna(0.0)
    out = out.drop(columns=["time_ms"])

    return out.sort_values(["ppg", "wins"], ascending=False).reset_index(drop=True)


def first_mover_table(df: pd.DataFrame) -> pd.DataFrame:
    long = per_engine_rows(df)
    if long.empty:
        return pd.DataFrame(columns=["name", "moved_first", "games", "ppg"])

    out = (
        long.groupby(["name", "moved_first"])
        .agg(games=("points", "size"), ppg=("points", "mean"))
        .reset_index()
    )
    return out


def cumulative_score(df: pd.DataFrame) -> pd.DataFrame:
    """Running points of engine 1 after every game."""
    pts = df["winner"].map({"p1": 1.0, "draw": 0.5, "p2": 0.0})
    return pd.DataFrame({
        "game": df["game"].to_numpy(),
        "p1_points": pts.cumsum().to_numpy(),
        "p1_ppg": (pts.cumsum() / pd.Series(range(1, len(pts) + 1), index=pts.index)).to_numpy(),
    })
