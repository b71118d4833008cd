import concurrent.futures
import logging
import math
import time

logger = logging.getLogger(__name__)


def split_rows(height, band_count):
    """Partition rows [0, height) into ceil(height / band_count)-row bands.

    The last band is truncated; empty bands are dropped.
    """
    if band_count <= 0:
        raise ValueError(f"Band count must be positive, got {band_count}")
    rows_per_band = max(1, math.ceil(height / band_count))
    return [(start, min(start + rows_per_band, height))
            for start in range(0, height, rows_per_band)]


def render_bands(render_band, bands, workers=None, parallel=True):
    """Run render_band(start, stop) for every band and wait for all of them.

    Bands run on a thread pool that lives only for this call. The first
    exception raised by a band is re-raised once every band has finished.
    """
    start_time = time.perf_counter()
    if not parallel or len(bands) <= 1:
        for start, stop in bands:
            render_band(start, stop)
    else:
        workers = min(workers or len(bands), len(bands))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="BandWorker") as executor:
            futures = [executor.submit(render_band, start, stop) for start, stop in bands]
            concurrent.futures.wait(futures)
        for future in futures:
            future.result()
    logger.debug(f"Rendered {len(bands)} bands in {(time.perf_counter() - start_time) * 1000:.1f} ms")
