"""
Orchestration layer for LLM chain execution with timeout and error handling.

Supports both parallel and sequential execution of chains with configurable timeouts,
error handling, and fallback values.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from langchain_core.runnables import Runnable

logger = logging.getLogger(__name__)


@dataclass
class ChainExecutionConfig:
    """Configuration for executing a single LLM chain."""

    name: str  # Result key (e.g., "fundamentals", "economic_events")
    timeout: float = 30.0  # Timeout in seconds
    fallback_value: Any = None  # Value to return on timeout/error
    required: bool = False  # If True, re-raise instead of falling back
    validator: Optional[Callable[[Any], bool]] = None  # Rejected results → fallback


class ChainOrchestrator:
    """
    Orchestrates parallel/sequential LLM chain execution with timeout handling.

    Manages concurrent execution of multiple LangChain runnables with:
    - Configurable timeouts per chain
    - Fallback values on timeout/error/invalid output
    - Both parallel and sequential execution modes
    """

    def __init__(self, default_timeout: float = 30.0):
        self.default_timeout = default_timeout

    def _accept(self, config: ChainExecutionConfig, result: Any) -> Any:
        if config.validator is not None and not config.validator(result):
            logger.warning("[ORCHESTRATOR] %s: invalid output → fallback", config.name)
            return config.fallback_value
        logger.info("[ORCHESTRATOR] %s: success", config.name)
        return result

    def execute_parallel(
        self,
        chains: List[Tuple[ChainExecutionConfig, Runnable, Dict[str, Any]]],
    ) -> Dict[str, Any]:
        """
        Execute multiple chains in parallel.

        Parameters:
            chains: List of tuples (config, chain, input_dict)

        Returns:
            Dict mapping config.name to result (or fallback_value on error)
        """
        if not chains:
            return {}

        results = {}
        executor = ThreadPoolExecutor(max_workers=len(chains))
        try:
            started = time.monotonic()
            futures = [(config, executor.submit(chain.invoke, inputs)) for config, chain, inputs in chains]

            for config, future in futures:
                # Each chain gets its own deadline, counted from submission.
                deadline = started + (config.timeout or self.default_timeout)
                try:
                    result = future.result(timeout=max(0.0, deadline - time.monotonic()))
                    results[config.name] = self._accept(config, result)
                except TimeoutError:
                    future.cancel()
                    results[config.name] = config.fallback_value
                    logger.warning("[ORCHESTRATOR] %s: timeout (%ss) → fallback", config.name,
                                   config.timeout or self.default_timeout)
                    if config.required:
                        raise
                except Exception as e:
                    results[config.name] = config.fallback_value
                    logger.warning("[ORCHESTRATOR] %s: error - %s: %s → fallback", config.name, type(e).__name__, e)
                    if config.required:
                        raise
        finally:
            # Don't block on chains that overran their timeout.
            executor.shutdown(wait=False)

        return results

    def execute_sequential(
        self,
        chains: List[Tuple[ChainExecutionConfig, Runnable, Dict[str, Any]]],
    ) -> Dict[str, Any]:
        """
        Execute chains sequentially in order.

        Parameters:
            chains: List of tuples (config, chain, input_dict)

        Returns:
            Dict mapping config.name to result (or fallback_value on error)
        """
        results = {}

        for config, chain, inputs in chains:
            try:
                results[config.name] = self._accept(config, chain.invoke(inputs))
            except Exception as e:
                results[config.name] = config.fallback_value
                logger.warning("[ORCHESTRATOR] %s: error - %s: %s → fallback", config.name, type(e).__name__, e)
                if config.required:
                    raise

        return results
