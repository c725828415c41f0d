import argparse
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from chart_state import ChartStatus, create_chart_state
from templeosrs_fetch import TempleClient, TransportError
from utils.console import c, field_line, set_color_enabled
from utils.logger import configure, log_error, log_ok, log_sync
from utils.settings import TRACKER
from utils.skills import SKILL_NAMES, MalformedSnapshot, skill_index


def _player_arg(value):
    name = (value or TRACKER.default_player or "").strip()
    if not name:
        raise SystemExit("No player given and TRACKER_DEFAULT_PLAYER is not set.")
    return name


def cmd_tui(args) -> int:
    from tui.app import run

    client = TempleClient()
    name = (args.player or TRACKER.default_player or "").strip() or None
    state = asyncio.run(create_chart_state(client, name, secondary_index=TRACKER.secondary_skill))
    if state.status is ChartStatus.LOADED:
        state.selection.select(0)
    run(state)
    return 0


def cmd_info(args) -> int:
    player = _player_arg(args.player)
    try:
        info = asyncio.run(TempleClient().player_information(player))
    except (TransportError, MalformedSnapshot) as e:
        log_error(f"[info] {player!r}: {type(e).__name__}: {e}")
        return 1

    def when(ts):
        return str(ts) if ts is not None else "never"

    flags = [label for label, on in (
        ("fresh start", info.fresh_start_account),
        ("level 3", info.combat_level_3),
        ("f2p", info.f2p),
        ("banned", info.banned),
        ("disqualified", info.disqualified),
    ) if on]

    print(c(info.username, "cyan", bold=True))
    print(field_line("Game mode", info.game_mode.label))
    print(field_line("Country", info.country or "-"))
    print(field_line("Flags", ", ".join(flags) or "-", color="red" if info.banned or info.disqualified else "white"))
    print(field_line("Clan preference", info.clan_preference if info.clan_preference is not None else "-"))
    print(field_line("Last checked", when(info.last_checked)))
    print(field_line("Last changed", when(info.last_changed)))
    print(field_line("Last changed KC", when(info.last_changed_kc)))
    print(field_line("Datapoint cooldown", info.datapoint_cooldown or "-"))
    return 0


def cmd_png(args) -> int:
    from utils.graph_renderer import render_skill_progress

    player = _player_arg(args.player)
    try:
        index = skill_index(args.skill)
    except KeyError:
        log_error(f"[png] unknown skill {args.skill!r}; choices: {', '.join(SKILL_NAMES)}")
        return 2

    state = asyncio.run(create_chart_state(TempleClient(), player, secondary_index=TRACKER.secondary_skill))
    if state.status is not ChartStatus.LOADED:
        log_error(f"[png] {state.status_line()}")
        return 1

    state.selection.select(index)
    view = state.chart()
    if view is None:
        log_error(f"[png] {player!r} has no datapoints to plot")
        return 1

    out = args.out or f"{player.replace(' ', '_')}_{view.skill_name.lower()}.png"
    buf = render_skill_progress(view, player)
    with open(out, "wb") as fh:
        fh.write(buf.getvalue())
    log_ok(f"[png] wrote {out} ({len(view.series)} points)")
    return 0


COMMANDS = ("tui", "info", "png")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TempleOSRS skill progress tracker")
    sub = parser.add_subparsers(dest="command")

    p_tui = sub.add_parser("tui", help="Interactive terminal chart (default)")
    p_tui.add_argument("player", nargs="?", help="Player to load on start")
    p_tui.set_defaults(func=cmd_tui)

    p_info = sub.add_parser("info", help="Print account information")
    p_info.add_argument("player", nargs="?")
    p_info.set_defaults(func=cmd_info)

    p_png = sub.add_parser("png", help="Render one skill chart to a PNG file")
    p_png.add_argument("player", nargs="?")
    p_png.add_argument("--skill", default="Overall", help="Skill to plot (default: Overall)")
    p_png.add_argument("--out", help="Output path (default: <player>_<skill>.png)")
    p_png.set_defaults(func=cmd_png)

    return parser


def main(argv=None) -> int:
    configure(path=TRACKER.log_file, level=TRACKER.log_level)
    set_color_enabled(TRACKER.log_color and sys.stderr.isatty())

    argv = list(sys.argv[1:] if argv is None else argv)
    # bare `main.py` or `main.py <player>` means the terminal UI
    if not argv or argv[0] not in COMMANDS and not argv[0].startswith("-"):
        argv.insert(0, "tui")
    args = build_parser().parse_args(argv)

    log_sync(f"[settings] api={TRACKER.api_base_url} secondary={SKILL_NAMES[TRACKER.secondary_skill]}")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
