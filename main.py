"""Main entry point for the Predictive Task Scheduling Engine."""

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

from predictive_scheduler.engine.scheduler import PredictiveScheduler
from predictive_scheduler.evaluation.evaluator import Evaluator
from predictive_scheduler.evaluation.generator import TaskGenerator
from predictive_scheduler.learning.store import InMemoryPatternStore
from predictive_scheduler.utils.config import load_config, get_default_config

logger = logging.getLogger(__name__)


def resolve_config(config_path: str) -> dict:
    """Load the config file if it exists, otherwise use defaults."""
    if config_path and Path(config_path).exists():
        return load_config(config_path)
    logger.info(f"Config {config_path} not found, using defaults")
    return get_default_config()


def resolve_date(value: str) -> datetime:
    """Parse --date or default to today at 08:00."""
    if value:
        return datetime.strptime(value, "%Y-%m-%d").replace(hour=8)
    return datetime.now().replace(hour=8, minute=0, second=0, microsecond=0)


def build_scheduler(config: dict, store_path: str) -> PredictiveScheduler:
    """Create a scheduler, loading a persisted pattern store if given."""
    store = InMemoryPatternStore()
    if store_path and Path(store_path).exists():
        with open(store_path, 'r') as f:
            store.load_dict(json.load(f))
    return PredictiveScheduler(config, store=store)


def save_store(scheduler: PredictiveScheduler, store_path: str):
    """Persist the pattern store as JSON."""
    if not store_path:
        return
    with open(store_path, 'w') as f:
        json.dump(scheduler.store.to_dict(), f, indent=2)
    logger.info(f"Saved pattern store to {store_path}")


def warm_up(scheduler: PredictiveScheduler, completions):
    """Feed historical completions into the scheduler."""
    for task, actual, completed_at in completions:
        scheduler.learn_from_completion(task, actual, completed_at)


def run_scheduling(args, config: dict):
    """Build and save a daily schedule for generated tasks."""
    today = resolve_date(args.date)
    generator = TaskGenerator(seed=args.seed, config=config)
    tasks, context, completions = generator.generate_task_stream(today)

    scheduler = build_scheduler(config, args.store)
    warm_up(scheduler, completions)

    schedule = scheduler.generate_daily_schedule(tasks, context, today)
    titles = {t.task_id: t.title for t in tasks}
    print(schedule.to_human_readable(titles))

    output_dir = Path(args.output)
    output_dir.mkdir(exist_ok=True)
    stamp = today.strftime("%Y%m%d")

    with open(output_dir / f"schedule_{stamp}.json", 'w') as f:
        json.dump(schedule.to_dict(), f, indent=2)
    with open(output_dir / f"schedule_{stamp}.log", 'w') as f:
        f.write(schedule.to_human_readable(titles))

    print(f"\nSchedule saved to: {output_dir / f'schedule_{stamp}.json'}")
    save_store(scheduler, args.store)
    return schedule


def run_recommendation(args, config: dict):
    """Recommend a slot for the first open generated task."""
    today = resolve_date(args.date)
    generator = TaskGenerator(seed=args.seed, config=config)
    tasks, context, completions = generator.generate_task_stream(today)

    scheduler = build_scheduler(config, args.store)
    warm_up(scheduler, completions)

    task = next(t for t in tasks if not t.is_closed)
    recommendation = scheduler.find_optimal_slots(task, context)
    prediction = scheduler.predict_completion(task, recommendation.suggested_slot, context)

    print(f"\nTask: {task.title}")
    print(f"Suggested: {recommendation.suggested_slot.start_at:%a %H:%M}-"
          f"{recommendation.suggested_slot.end_at:%H:%M} (score {recommendation.score:.1f})")
    for reason in recommendation.reasoning:
        print(f"  {reason}")
    for alt in recommendation.alternatives:
        print(f"  Alternative: {alt.start_at:%a %H:%M} (score {alt.score:.1f})")
    print(f"Completion probability: {prediction.completion_probability:.2f}")
    for risk in prediction.risk_factors:
        print(f"  Risk: {risk}")

    save_store(scheduler, args.store)
    return recommendation, prediction


def run_evaluation(args, config: dict):
    """Run the prediction accuracy evaluation."""
    today = resolve_date(args.date)
    generator = TaskGenerator(seed=args.seed, config=config)
    _, context, completions = generator.generate_task_stream(today)

    evaluator = Evaluator(config)
    result = evaluator.run_evaluation(completions, context, args.output)

    print(f"\nEvaluation saved to: {Path(args.output) / 'evaluation_results.json'}")
    return result


def run_generation(args, config: dict):
    """Dump generated tasks to JSON for inspection."""
    today = resolve_date(args.date)
    generator = TaskGenerator(seed=args.seed, config=config)
    tasks, _, completions = generator.generate_task_stream(today)

    print(f"Generated {len(tasks)} tasks")
    print(f"Generated {len(completions)} completions")

    output_dir = Path(args.output)
    output_dir.mkdir(exist_ok=True)
    with open(output_dir / "generated_tasks.json", 'w') as f:
        json.dump([t.to_dict() for t in tasks], f, indent=2)

    print(f"Tasks saved to: {output_dir / 'generated_tasks.json'}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Predictive Task Scheduling Engine"
    )
    parser.add_argument(
        'command',
        choices=['schedule', 'recommend', 'evaluate', 'generate-tasks'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument('--seed', type=int, default=42, help='Random seed (default: 42)')
    parser.add_argument('--date', type=str, default=None, help='Target date as YYYY-MM-DD (default: today)')
    parser.add_argument('--store', type=str, default=None, help='Pattern store JSON file to load and save')
    parser.add_argument('--output', type=str, default='results', help='Output directory (default: results)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = resolve_config(args.config)

    if args.command == 'schedule':
        run_scheduling(args, config)
    elif args.command == 'recommend':
        run_recommendation(args, config)
    elif args.command == 'evaluate':
        run_evaluation(args, config)
    elif args.command == 'generate-tasks':
        run_generation(args, config)


if __name__ == "__main__":
    main()
