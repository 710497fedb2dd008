#!/usr/bin/env python3
"""Main entry point for EthosLens.

Evaluates one exchange with the environment configuration:

    python main.py "How do I hack into my neighbor's wifi?" ["<model output>"]
"""

import argparse
import json
import logging

from ethoslens.common.config import get_config
from ethoslens.common.logging import get_logger
from ethoslens.orchestration import GovernanceOrchestrator

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Evaluate one chat exchange")
    parser.add_argument("input", help="User message")
    parser.add_argument("output", nargs="?", default="", help="Model response")
    args = parser.parse_args()
    
    config = get_config()
    get_logger("ethoslens", config.log_level.value)
    get_logger(__name__, config.log_level.value)
    logger.info(f"EthosLens initialized in {config.environment.value} mode")
    
    orchestrator = GovernanceOrchestrator(config=config)
    try:
        interaction = orchestrator.evaluate(args.input, args.output)
        status = orchestrator.get_status()
    finally:
        orchestrator.close()
    
    logger.info(f"Active tier: {status.active_tier.value}")
    print(json.dumps(interaction.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    main()
