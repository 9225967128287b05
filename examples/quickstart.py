"""goapkit Quickstart: a picnic agent that keeps choosing what to do next

This script embeds the built-in picnic agent in a PlanningRuntime. Every tick
the agent ranks its goals by priority, plans for the most important one it
can reach, and executes only the first action of that plan.

Run with:
    python examples/quickstart.py

Watch as the agent:
- Sets up a picnic and eats while hungry (EATEN outranks BOUQUET_MADE)
- Switches to picking flowers once fed
- Goes idle when every goal is satisfied
"""

from goapkit.demo import build_agent
from goapkit.runtime import PlanningRuntime


def main():
    runtime = PlanningRuntime()
    runtime.attach("alice", build_agent(hungry=True))

    print("Picnic runtime started")
    print(f"  Initial state: {runtime.get('alice').state}")
    print()

    for record in runtime.run(9):
        entity = record.entity_records[0]
        if entity.action is None:
            print(f"Tick {record.tick}: idle (goal {entity.goal!r} satisfied)")
            continue
        print(
            f"Tick {record.tick}: goal {entity.goal!r}, "
            f"{entity.plan_steps}-step plan, doing {entity.action!r}"
        )

    print()
    print(f"Final state: {runtime.get('alice').state}")

    # Planning statistics collected by the agent's monitor
    monitor = runtime.get("alice").monitor
    if monitor is not None:
        stats = monitor.planning_stats
        print(f"Searches run: {stats['searches']}, fallbacks: {stats['fallback_count']}")


if __name__ == "__main__":
    main()
