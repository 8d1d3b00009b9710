# sysloggen/generator.py
"""Concurrent dispatch engine and run statistics."""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import ConfigurationError
from .pools import ContentPools
from .senders import DatagramSender, Destination, validate_address
from .templates import MessageSynthesizer

logger = logging.getLogger(__name__)


def partition(total_messages: int, worker_count: int) -> List[int]:
    """Split ``total_messages`` into one quota per worker.

    Every worker gets the integer share; the remainder goes to the last
    worker, e.g. 10 messages over 3 workers gives ``[3, 3, 4]``.
    """
    if worker_count <= 0:
        raise ConfigurationError(f"Worker count must be positive, got {worker_count}")
    if total_messages < 0:
        raise ConfigurationError(f"Message count cannot be negative, got {total_messages}")
    
    base, remainder = divmod(total_messages, worker_count)
    quotas = [base] * worker_count
    quotas[-1] += remainder
    return quotas


@dataclass
class DispatchPlan:
    """Everything a run needs, fixed before the workers start."""
    destination: Destination
    total_messages: int
    worker_count: int
    source_address: Optional[str] = None
    delay: float = 0.0
    quotas: List[int] = field(init=False)
    
    def __post_init__(self):
        port = self.destination[1]
        if not 0 <= port <= 65535:
            raise ConfigurationError(f"Port must be between 0 and 65535, got {port}")
        if self.delay < 0:
            raise ConfigurationError(f"Delay cannot be negative, got {self.delay}")
        self.quotas = partition(self.total_messages, self.worker_count)


@dataclass
class RunResult:
    """Outcome of a completed run."""
    total_messages: int
    elapsed: float
    throughput: Optional[float]
    failed: int = 0
    
    @property
    def throughput_defined(self) -> bool:
        return self.throughput is not None
    
    def get_summary(self, plan: Optional[DispatchPlan] = None) -> str:
        """Get a formatted summary of the run."""
        rate = f"{self.throughput:.2f}" if self.throughput_defined else "n/a"
        
        lines = [
            "\n" + "=" * 60,
            "SYSLOG GENERATOR SUMMARY",
            "=" * 60,
        ]
        if plan is not None:
            host, port = plan.destination
            lines.append(f"Sent {self.total_messages} messages to {host}:{port}.")
            if plan.source_address:
                lines.append(f"Using source IP: {plan.source_address}")
        else:
            lines.append(f"Sent {self.total_messages} messages.")
        lines.extend([
            f"Skipped sends: {self.failed}",
            f"Time taken: {self.elapsed:.6f} seconds",
            f"Messages per second: {rate}",
            "=" * 60,
        ])
        return "\n".join(lines)


class RunStats:
    """Wall-clock timing of a run and the failed-send counter."""
    
    def __init__(self):
        self._lock = threading.Lock()
        self.failed = 0
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
    
    def start(self) -> None:
        self.start_time = time.perf_counter()
    
    def stop(self) -> None:
        self.end_time = time.perf_counter()
    
    @property
    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time
    
    def record_failure(self) -> None:
        with self._lock:
            self.failed += 1
    
    @staticmethod
    def summarize(total_messages: int, elapsed: float, failed: int = 0) -> RunResult:
        """Compute throughput; undefined (None) when nothing was timed or sent."""
        if elapsed <= 0 or total_messages == 0:
            throughput = None
        else:
            throughput = total_messages / elapsed
        return RunResult(
            total_messages=total_messages,
            elapsed=elapsed,
            throughput=throughput,
            failed=failed,
        )


class DispatchEngine:
    """Run a dispatch plan over a fixed pool of worker threads."""
    
    def __init__(
        self,
        plan: DispatchPlan,
        pools: ContentPools,
        sender: Optional[DatagramSender] = None,
    ):
        self.plan = plan
        self.pools = pools
        if sender is None:
            sender = DatagramSender(
                plan.destination,
                source_address=plan.source_address,
                source_pool=pools.source_addresses,
            )
        self.sender = sender
        self.stats = RunStats()
    
    def _worker(self, index: int, quota: int, synthesizer: MessageSynthesizer) -> None:
        """Send ``quota`` messages; a skipped send uses up its iteration without the delay."""
        rng = synthesizer.random
        delay = self.plan.delay
        
        for _ in range(quota):
            record = synthesizer.synthesize()
            try:
                status = self.sender.send(record, rng)
            except Exception as e:
                logger.warning(f"Worker {index} send error: {e}")
                self.stats.record_failure()
                continue
            if not status.ok:
                self.stats.record_failure()
                continue
            if delay > 0:
                time.sleep(delay)
        
        logger.debug(f"Worker {index} finished {quota} messages")
    
    def run(self) -> RunResult:
        """Start every worker, wait for all of them and summarize."""
        host, port = self.plan.destination
        validate_address(host, role="destination")
        
        logger.info(
            f"Dispatching {self.plan.total_messages} messages to {host}:{port} "
            f"with {self.plan.worker_count} workers"
        )
        
        self.stats = RunStats()
        threads = [
            threading.Thread(
                target=self._worker,
                args=(i, quota, MessageSynthesizer(self.pools)),
                name=f"sysloggen-worker-{i}",
                daemon=True,
            )
            for i, quota in enumerate(self.plan.quotas)
        ]
        
        self.stats.start()
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.stats.stop()
        
        result = self.stats.summarize(
            self.plan.total_messages, self.stats.elapsed, self.stats.failed
        )
        if result.failed:
            logger.warning(f"{result.failed} of {result.total_messages} sends were skipped")
        return result
