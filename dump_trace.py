#!/usr/bin/env python3
"""
Trace Dump - prints trace entries as formatted property trees
"""

import logging
import sys
from trace_tree import PropertySource, TimestampType, TraceConfig, load_parser
from trace_tree.core.errors import TraceTreeError


def print_tree(node, indent=0):
    """Print a property tree, one node per line."""
    value = node.formatted_value()
    marker = ' *' if node.source is PropertySource.CALCULATED else ''
    line = f"{'  ' * indent}{node.name}{marker}"
    if value:
        line += f": {value}"
    print(line)
    for child in node.get_all_children():
        print_tree(child, indent + 1)


def main():
    import argparse
    parser = argparse.ArgumentParser(
        description='Print entries of a ProtoLog or transitions trace as property trees.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python dump_trace.py transitions.json
  python dump_trace.py protolog.json --viewer-config viewer_config.json
  python dump_trace.py protolog.json --domain real --index 0 --index 5
  python dump_trace.py transitions.json --no-operations

Calculated properties are marked with '*'.
        """
    )
    parser.add_argument('input_file', help='Path to the trace JSON file')
    parser.add_argument('--viewer-config', dest='viewer_config', help='ProtoLog viewer config JSON file')
    parser.add_argument('--domain', choices=[t.value for t in TimestampType], default='elapsed',
                       help='Time domain of the printed timestamps')
    parser.add_argument('--index', type=int, action='append', dest='indices',
                       help='Entry index to print (repeatable, default: all entries)')
    parser.add_argument('--no-operations', action='store_true',
                       help='Skip calculated properties')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()
    
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )
    
    config = TraceConfig(
        viewer_config_path=args.viewer_config,
        apply_operations=not args.no_operations
    )
    timestamp_type = TimestampType(args.domain)
    
    try:
        trace = load_parser(args.input_file, config)
        print(f"{trace.get_trace_type().name}: {trace.get_length_entries()} entries\n")
        
        indices = args.indices if args.indices is not None else range(trace.get_length_entries())
        for index in indices:
            print(f"[{index}]")
            print_tree(trace.get_entry(index, timestamp_type), indent=1)
    except FileNotFoundError as e:
        print(f"Error: File '{e.filename}' not found.")
        sys.exit(1)
    except TraceTreeError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
