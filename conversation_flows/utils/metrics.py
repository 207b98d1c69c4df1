# /conversation_flows/utils/metrics.py

from prometheus_client import Counter, Histogram

# This file defines all Prometheus metrics used for monitoring the flow engine.
# Centralizing them here makes them easy to find and manage.

# Flow Engine Metrics
flow_turns_counter = Counter('conversation_flow_turns_total', 'Engine turns processed', ['flow_type', 'outcome'])
flow_completions_counter = Counter('conversation_flow_completions_total', 'Flows that reached their terminal step', ['flow_type'])
unresolved_steps_counter = Counter('conversation_flow_unresolved_steps_total', 'Turns ended because a step id could not be resolved', ['flow_type', 'source'])
validation_failures_counter = Counter('conversation_flow_validation_failures_total', 'Answers rejected by step validation', ['flow_type', 'step_id'])

# Performance Metrics
response_time_histogram = Histogram('response_time_seconds', 'Response time in seconds', ['endpoint'])
