"""
Simple simulation script: a random human against the computer.
"""

import random
import sys

import requests


def play_random_game(http, session_url: str, rng: random.Random) -> dict:
    """Play random legal moves until the game ends; return the final state."""
    state = http.get(session_url).json()

    while state["status"] == "in_progress":
        index = rng.choice(state["legal_moves"])
        response = http.post(f"{session_url}/move", json={"index": index})
        if response.status_code != 200:
            raise RuntimeError(f"Move failed: {response.text}")
        state = response.json()["session"]

    return state


def run_simulation(http=requests, base_url: str = "http://localhost:8000/api/v1",
                   num_games: int = 20, seed: int = 0) -> dict:
    """
    Play `num_games` games in one pve session and return the score card.
    """
    rng = random.Random(seed)

    response = http.post(f"{base_url}/sessions", json={"mode": "pve"})
    if response.status_code != 200:
        raise RuntimeError(f"Failed to create session: {response.text}")
    session = response.json()
    session_url = f"{base_url}/sessions/{session['id']}"
    computer = session["automated_mark"]

    draws = 0
    for game_num in range(num_games):
        state = play_random_game(http, session_url, rng)
        if state["status"] == "draw":
            draws += 1
            print(f"  Game {game_num + 1}: Draw")
        else:
            print(f"  Game {game_num + 1}: {state['winner']} won on line {state['winning_line']}")
        http.post(f"{session_url}/reset")

    score = http.get(session_url).json()["score"]
    return {"computer": computer, "score": score, "draws": draws}


def main():
    NUM_GAMES = 20

    print("=== TicTacToe Simulation ===\n")
    print(f"Playing {NUM_GAMES} games against the computer...")

    try:
        result = run_simulation(num_games=NUM_GAMES)
    except (requests.RequestException, RuntimeError) as e:
        print(f"X Simulation failed: {e}")
        sys.exit(1)

    computer = result["computer"]
    human = "X" if computer == "O" else "O"
    score = result["score"]

    print("\n=== Results ===\n")
    print(f"  Computer ({computer}) wins: {score[computer]}")
    print(f"  Human ({human}) wins: {score[human]}")
    print(f"  Draws: {result['draws']}")

    if score[human]:
        print("\n The computer lost a game!")
        sys.exit(1)

    print("\n Simulation complete!")


if __name__ == "__main__":
    main()
