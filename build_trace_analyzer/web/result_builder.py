"""
Result builder for web interface output.
"""


def _with_formatted(analyzer, items):
    result = []
    for item in items:
        entry = dict(item)
        entry['duration_formatted'] = analyzer.format_time(item['duration_us'])
        if item.get('count'):
            entry['avg_us'] = item['duration_us'] // item['count']
            entry['avg_formatted'] = analyzer.format_time(entry['avg_us'])
        result.append(entry)
    return result


def prepare_results(analyzer):
    """
    Convert analyzer results to a structured format for JSON output.

    Args:
        analyzer: BuildAnalyzer instance with completed analysis

    Returns:
        Dictionary with structured results, including the text report
    """
    summary = analyzer.summary

    time_summary = {
        'compilations': summary['compilations'],
        'total_wall_time_us': summary['total_wall_time_us'],
        'total_wall_time_formatted': analyzer.format_time(summary['total_wall_time_us']),
        'cumulative_compile_us': summary['cumulative_compile_us'],
        'cumulative_compile_formatted': analyzer.format_time(summary['cumulative_compile_us']),
        'parallelism_factor': summary['parallelism_factor'],
        'files_analyzed': len(analyzer.files_analyzed),
        'unique_names': len(analyzer.names),
        'total_events': len(analyzer.events),
    }

    # Categories without events are noise in the UI
    categories = [c for c in _with_formatted(analyzer, summary['categories']) if c['count']]

    return {
        'summary': time_summary,
        'categories': categories,
        'expensive_headers': _with_formatted(analyzer, summary['expensive_headers']),
        'template_sets': _with_formatted(analyzer, summary['template_sets']),
        'function_sets': _with_formatted(analyzer, summary['function_sets']),
        'slowest': {
            category: _with_formatted(analyzer, events)
            for category, events in summary['slowest'].items()
        },
        'warnings': list(analyzer.warnings),
        'report': analyzer.report(),
    }
