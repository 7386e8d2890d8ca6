"""
Apache Status Collector.

Pipeline pieces in call order:
    options  - argv parsing and validation into Options
    cache    - per-host result cache with a half-poll-interval freshness window
    runner   - ssh + wget command construction and execution
    apache   - server-status?auto text parsing into a MetricSet
    output   - code table formatting and --items filtering
    service  - the collector routine tying the above together
"""
