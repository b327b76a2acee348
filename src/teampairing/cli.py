"""Command-line interface for running a pairing session.

Each invocation loads the stored tournament, applies one action and
stores the result, so a whole tournament is driven by a sequence of
commands such as::

    teampairing new --my-roster us.json --opponent-roster them.json \
        --maps "Passing Seasons,Roiling Roots,Lifecycle,Noxious Nexus"
    teampairing status
    teampairing select Ann
    teampairing select Bob
"""

# Team Pairing
# Copyright (C) 2025  Team Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from teampairing.constants import (
    DEFAULT_DATA_DIR,
    MY_SIDE,
    NUM_ROUNDS,
    OPPONENT_SIDE,
    STATUS_COMPLETED,
)
from teampairing.data import default_maps
from teampairing.exceptions import (
    PlayerNotFoundException,
    TeamPairingException,
    TournamentSetupException,
)
from teampairing.models import GameMap, Phase, Player, TournamentState, find_player
from teampairing.pairing import (
    PlayerAnnotation,
    annotate_team,
    apply_selection,
    battleplan_scores_by_round,
    create_tournament,
    current_battleplan_name,
    get_phase_description,
    matchup_scores_for_list,
    pairings_by_round,
    required_selection_count,
    round3_preview,
    selectable_players,
    selection_side,
)
from teampairing.roster import load_maps, load_roster, save_roster
from teampairing.storage import TournamentStorage
from teampairing.type_hints import Side
from teampairing.utils import set_log_level, setup_logger

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_REJECTED = 2


# ========== Formatting ==========


def format_annotation(annotation: PlayerAnnotation, state: TournamentState) -> str:
    """One roster line: player, current score and markers."""
    player = annotation.player
    markers = []
    if not annotation.is_available:
        markers.append("paired")
    if state.my_defender and state.my_defender.id == player.id:
        markers.append("defender")
    if state.opponent_defender and state.opponent_defender.id == player.id:
        markers.append("defender")
    for attackers in (state.my_attackers, state.opponent_attackers):
        if attackers and any(a.id == player.id for a in attackers):
            markers.append("attacker")
    if annotation.is_best_battleplan:
        markers.append("*best*")
    if annotation.last_chance_threshold is not None:
        markers.append(f"last chance {annotation.last_chance_threshold}+")
    if annotation.matchup_score is not None:
        markers.append(f"matchup {annotation.matchup_score}")
    if annotation.medal:
        markers.append(annotation.medal)

    score = "-" if annotation.score is None else str(annotation.score)
    suffix = f"  [{', '.join(markers)}]" if markers else ""
    return f"  {score:>2}  {player}{suffix}"


def format_round_scores(state: TournamentState, player: Player) -> str:
    """Scores on the current and later battleplans, e.g. ``R3: 5  R4: -``."""
    return "  ".join(
        f"R{round_number}: {'-' if score is None else score}"
        for round_number, _, score in battleplan_scores_by_round(
            state, player, remaining_only=True
        )
    )


def _print_team(state: TournamentState, side: Side, show_scores: bool = False) -> None:
    team = state.my_team if side == MY_SIDE else state.opponent_team
    print(f"{team.name} ({'you' if side == MY_SIDE else 'opponent'}):")
    for annotation in annotate_team(state, side):
        print(format_annotation(annotation, state))
        if show_scores and annotation.is_available and annotation.player.has_scores:
            print(f"        {format_round_scores(state, annotation.player)}")


def _print_map_details(game_map: Optional[GameMap], indent: str = "") -> None:
    if game_map is None:
        return
    for label, text in (
        ("Description", game_map.description),
        ("Twist", game_map.twist),
        ("Scoring", game_map.scoring),
    ):
        if text:
            print(f"{indent}{label}: {text}")


def _print_matchups_for(state: TournamentState, player: Player) -> None:
    print(f"Matchups for {player.name} ({player.list_key}):")
    for opponent, score in matchup_scores_for_list(state, player.list_key):
        shown = "-" if score is None else str(score)
        print(f"  {shown:>2}  {opponent}")


def _print_round3_preview(state: TournamentState) -> None:
    preview = round3_preview(state)
    if preview is None:
        return
    print()
    print(
        "Round 3 is the last choice: remaining players auto-pair on "
        f"{preview.final_map.name}"
    )
    for outcome in preview.outcomes:
        if outcome.is_resolved:
            pairs = "; ".join(
                f"{mine.name} vs {theirs.name}"
                for mine, theirs in outcome.final_pairings()
            )
            print(f"  if {outcome.chosen.name} is picked: {pairs}")
        else:
            names = ", ".join(p.name for p in outcome.opponent_final)
            print(f"  if you pick {outcome.chosen.name}: opponent keeps {names}")


def print_status(
    state: TournamentState,
    matchups_for: Optional[Player] = None,
    show_scores: bool = False,
) -> None:
    """Print round, phase, both annotated rosters and pairings so far.

    Args:
        state: State to show
        matchups_for: One of my players whose matrix scores against every
            opponent player are listed as well
        show_scores: Also list each available player's scores on the
            remaining battleplans
    """
    if state.status == STATUS_COMPLETED:
        print("Tournament complete.")
        print_results(state)
        return

    print(f"Round {state.current_round}/{NUM_ROUNDS}: {current_battleplan_name(state)}")
    _print_map_details(state.current_map)
    print(f"Phase: {get_phase_description(state.phase)}")
    required = required_selection_count(state.phase)
    if required:
        side = selection_side(state.phase)
        names = ", ".join(p.name for p in selectable_players(state, side))
        print(f"Select {required} from {side} roster: {names}")
    else:
        print("Run 'teampairing next' to continue")
    print()
    _print_team(state, MY_SIDE, show_scores)
    print()
    _print_team(state, OPPONENT_SIDE, show_scores)
    if matchups_for is not None:
        print()
        _print_matchups_for(state, matchups_for)
    _print_round3_preview(state)
    if state.pairings:
        print()
        print("Pairings:")
        for pairing in state.pairings:
            print(f"  {pairing}")


def print_results(state: TournamentState) -> None:
    for round_number, game_map, pairings in pairings_by_round(state):
        print(f"Round {round_number}: {game_map.name}")
        for pairing in pairings:
            marker = " (auto)" if pairing.is_auto_paired else ""
            print(f"  {pairing.my_player} vs {pairing.opponent_player}{marker}")


# ========== Helpers ==========


def _available_maps(
    storage: TournamentStorage, maps_file: Optional[str]
) -> Tuple[GameMap, ...]:
    if maps_file:
        return load_maps(maps_file)
    return storage.load_custom_maps() or default_maps()


def _select_maps(pool: Sequence[GameMap], names: str) -> List[GameMap]:
    by_name = {m.name.casefold(): m for m in pool}
    selected = []
    for name in (n.strip() for n in names.split(",") if n.strip()):
        game_map = by_name.get(name.casefold())
        if game_map is None:
            raise TournamentSetupException(f"Unknown battleplan: {name}")
        selected.append(game_map)
    return selected


def resolve_selection(state: TournamentState, names: Sequence[str]) -> List[Player]:
    """Turn player names into players selectable in the current phase.

    Raises:
        PlayerNotFoundException: If a name matches no selectable player
    """
    side = selection_side(state.phase)
    if side is None:
        if names:
            raise PlayerNotFoundException(
                "No players can be selected while: "
                f"{get_phase_description(state.phase)}"
            )
        return []

    team = state.my_team if side == MY_SIDE else state.opponent_team
    selectable = selectable_players(state, side)
    players = []
    for name in names:
        player = find_player(selectable, name)
        if player is None:
            known = team.find_player(name)
            if known is None:
                raise PlayerNotFoundException(
                    f"No player named {name!r} on {team.name}"
                )
            raise PlayerNotFoundException(f"{known.name} cannot be selected now")
        players.append(player)
    return players


def _require_state(storage: TournamentStorage) -> TournamentState:
    state = storage.load_state()
    if state is None:
        raise TeamPairingException("No tournament in progress; run 'teampairing new'")
    return state


# ========== Commands ==========


def run_new_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    my_team = load_roster(args.my_roster)
    opponent_team = load_roster(args.opponent_roster)
    pool = _available_maps(storage, args.maps_file)
    state = create_tournament(
        my_team, opponent_team, _select_maps(pool, args.maps), all_maps=pool
    )

    storage.clear_state()
    if args.maps_file:
        storage.save_custom_maps(pool)
    storage.save_my_team(my_team)
    storage.save_opponent_team(opponent_team)
    storage.save_state(state)
    print_status(state)
    return EXIT_OK


def run_status_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    state = _require_state(storage)
    focus = None
    if args.matchups_for:
        focus = state.my_team.find_player(args.matchups_for)
        if focus is None:
            raise PlayerNotFoundException(
                f"No player named {args.matchups_for!r} on {state.my_team.name}"
            )
    print_status(state, matchups_for=focus, show_scores=args.scores)
    return EXIT_OK


def _apply(
    storage: TournamentStorage, state: TournamentState, players: List[Player]
) -> int:
    new_state = apply_selection(state, players)
    if new_state is state:
        print(f"Selection rejected: {get_phase_description(state.phase)}")
        return EXIT_REJECTED
    storage.save_state(new_state, add_to_history=True)
    print_status(new_state)
    return EXIT_OK


def run_select_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    state = _require_state(storage)
    try:
        players = resolve_selection(state, args.players)
    except PlayerNotFoundException as e:
        print(f"Selection rejected: {e}")
        return EXIT_REJECTED
    return _apply(storage, state, players)


def run_next_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    state = _require_state(storage)
    if state.status == STATUS_COMPLETED:
        print_status(state)
        return EXIT_OK
    if state.phase not in (Phase.ROUND_COMPLETE, Phase.TOURNAMENT_COMPLETE):
        print(f"Round in progress: {get_phase_description(state.phase)}")
        return EXIT_REJECTED
    return _apply(storage, state, [])


def run_undo_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    state = storage.pop_history()
    if state is None:
        print("Nothing to undo")
        return EXIT_REJECTED
    print_status(state)
    return EXIT_OK


def run_reset_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    if args.all:
        storage.clear_all()
    else:
        storage.clear_state()
    print("Tournament reset")
    return EXIT_OK


def run_maps_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    for index, game_map in enumerate(_available_maps(storage, args.maps_file), 1):
        print(f"{index:>2}. {game_map.name}")
        if args.details:
            _print_map_details(game_map, indent="    ")
    return EXIT_OK


def run_results_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    print_results(_require_state(storage))
    return EXIT_OK


def run_export_command(args: argparse.Namespace, storage: TournamentStorage) -> int:
    if args.side == MY_SIDE:
        team = storage.load_my_team()
    else:
        team = storage.load_opponent_team()
    if team is None:
        raise TeamPairingException(f"No {args.side} team stored")
    path = save_roster(team, args.path)
    print(f"Exported {team.name} to {path}")
    return EXIT_OK


COMMANDS = {
    "new": run_new_command,
    "status": run_status_command,
    "select": run_select_command,
    "next": run_next_command,
    "undo": run_undo_command,
    "reset": run_reset_command,
    "maps": run_maps_command,
    "results": run_results_command,
    "export-roster": run_export_command,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="teampairing",
        description="Defender/attacker pairing for two-team, four-round tournaments",
    )
    parser.add_argument(
        "--data-dir",
        default=DEFAULT_DATA_DIR,
        help=f"Directory for tournament files (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="Start a new tournament")
    new_parser.add_argument("--my-roster", required=True, help="Your roster file")
    new_parser.add_argument(
        "--opponent-roster", required=True, help="Opponent roster file"
    )
    new_parser.add_argument(
        "--maps",
        required=True,
        help=f"Comma-separated list of {NUM_ROUNDS} battleplans in play order",
    )
    new_parser.add_argument("--maps-file", help="Custom battleplan file")

    status_parser = subparsers.add_parser(
        "status", help="Show the current round and rosters"
    )
    status_parser.add_argument(
        "--matchups-for",
        metavar="NAME",
        help="List matrix scores of one of your players against every opponent",
    )
    status_parser.add_argument(
        "--scores",
        action="store_true",
        help="Show scores on the remaining battleplans for each player",
    )

    select_parser = subparsers.add_parser(
        "select", help="Confirm the selection for the current phase"
    )
    select_parser.add_argument(
        "players", nargs="+", help="Player names (or list names / armies)"
    )

    subparsers.add_parser("next", help="Start the next round or finish")
    subparsers.add_parser("undo", help="Step back one action")

    reset_parser = subparsers.add_parser("reset", help="Discard the tournament")
    reset_parser.add_argument(
        "--all", action="store_true", help="Also discard stored teams and maps"
    )

    maps_parser = subparsers.add_parser("maps", help="List available battleplans")
    maps_parser.add_argument("--maps-file", help="Custom battleplan file")
    maps_parser.add_argument(
        "--details", action="store_true", help="Show description, twist and scoring"
    )

    subparsers.add_parser("results", help="Show pairings by round")

    export_parser = subparsers.add_parser(
        "export-roster", help="Write a stored team to a roster file"
    )
    export_parser.add_argument("side", choices=[MY_SIDE, OPPONENT_SIDE])
    export_parser.add_argument("path", help="Destination file")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    storage = TournamentStorage(args.data_dir)
    try:
        return COMMANDS[args.command](args, storage)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except TeamPairingException as e:
        logger.error("%s", e)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
