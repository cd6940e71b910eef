import cProfile
import functools
import time
import tracemalloc


def profiled(path):
    """
    Run the wrapped function under cProfile and dump the stats to path.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            profiler = cProfile.Profile()
            profiler.enable()
            try:
                return func(*args, **kwargs)
            finally:
                profiler.disable()
                profiler.dump_stats(path)
        return wrapper
    return decorator


def measured(logger):
    """
    Log elapsed wall-clock time and traced heap allocations around the wrapped function.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            was_tracing = tracemalloc.is_tracing()
            if not was_tracing:
                tracemalloc.start()
            current, _ = tracemalloc.get_traced_memory()
            logger.info("Initial memory usage: Alloc = %d KB", current // 1024)
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start
                current, peak = tracemalloc.get_traced_memory()
                if not was_tracing:
                    tracemalloc.stop()
                logger.info("CSV to JSON Lines conversion completed in %.3fs", elapsed)
                logger.info("Final memory usage: Alloc = %d KB (peak %d KB)", current // 1024, peak // 1024)
        return wrapper
    return decorator
