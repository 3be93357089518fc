from prometheus_client import Counter, Gauge, generate_latest

CACHE_HITS = Counter("agecache_hits_total", "Reads answered by the underlying cache")
CACHE_MISSES = Counter("agecache_misses_total", "Reads that returned nothing")
CACHE_EXPIRATIONS = Counter(
    "agecache_expirations_total", "Entries evicted because their lifetime elapsed"
)
CACHE_WRITES = Counter("agecache_writes_total", "Writes through the decorator", ["outcome"])
TRACKED_KEYS = Gauge("agecache_tracked_keys", "Keys with an aging record, across all caches")


def render_metrics() -> bytes:
    return generate_latest()
