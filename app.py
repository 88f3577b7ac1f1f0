#!/usr/bin/env python3
"""
Flask Web Application for Trace Tree
Provides a REST API for loading trace files and browsing their entries as property trees.
"""

from flask import Flask, request, jsonify
from werkzeug.utils import secure_filename
import logging
import os
import secrets
import tempfile
from trace_tree import TimestampType, TraceConfig, load_parser
from trace_tree.core.errors import (
    MissingTimestampTypeError,
    OutOfRangeError,
    TraceDecodeError,
)
from trace_tree.web import serialize_tree, serialize_timestamps, describe_parser

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

logger = logging.getLogger("trace_tree.app")

ALLOWED_EXTENSIONS = {'json'}

# trace_id -> (filename, TraceParser)
loaded_traces = {}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def parse_timestamp_type(value):
    """Map the 'domain' query argument to a TimestampType, or None if invalid."""
    try:
        return TimestampType((value or 'elapsed').lower())
    except ValueError:
        return None


def save_upload(file):
    filename = secure_filename(file.filename)
    fd, filepath = tempfile.mkstemp(suffix=f'-{filename}', dir=app.config['UPLOAD_FOLDER'])
    os.close(fd)
    file.save(filepath)
    return filename, filepath


@app.route('/api/traces', methods=['POST'])
def upload_trace():
    """
    API endpoint to load a trace file.
    Accepts: multipart/form-data with fields:
      - 'file': trace JSON file
      - 'viewer_config': ProtoLog viewer config JSON file (optional)
      - 'apply_operations': 'true'|'false' (optional, default: 'true')
    Returns: JSON description of the loaded trace
    """
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']

    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400

    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Only JSON files are allowed.'}), 400

    apply_operations = request.form.get('apply_operations', 'true').lower() == 'true'

    paths = []
    try:
        filename, filepath = save_upload(file)
        paths.append(filepath)

        viewer_config_path = None
        viewer_config = request.files.get('viewer_config')
        if viewer_config and viewer_config.filename:
            _, viewer_config_path = save_upload(viewer_config)
            paths.append(viewer_config_path)

        parser = load_parser(filepath, TraceConfig(
            viewer_config_path=viewer_config_path,
            apply_operations=apply_operations
        ))
    except TraceDecodeError as e:
        return jsonify({'error': str(e)}), 400
    finally:
        for path in paths:
            os.remove(path)

    trace_id = secrets.token_hex(4)
    loaded_traces[trace_id] = (filename, parser)
    logger.info("Loaded trace %s from %s", trace_id, filename)

    return jsonify(describe_parser(trace_id, filename, parser))


@app.route('/api/traces/<trace_id>', methods=['GET'])
def get_trace(trace_id):
    if trace_id not in loaded_traces:
        return jsonify({'error': 'Trace not found'}), 404
    filename, parser = loaded_traces[trace_id]
    return jsonify(describe_parser(trace_id, filename, parser))


@app.route('/api/traces/<trace_id>', methods=['DELETE'])
def delete_trace(trace_id):
    if loaded_traces.pop(trace_id, None) is None:
        return jsonify({'error': 'Trace not found'}), 404
    return jsonify({'deleted': trace_id})


@app.route('/api/traces/<trace_id>/timestamps', methods=['GET'])
def get_timestamps(trace_id):
    """
    API endpoint listing one timestamp per entry.
    Accepts: query argument 'domain' = 'elapsed'|'real' (default: 'elapsed')
    Returns: JSON with the timestamps, or 404 if the trace lacks that domain
    """
    if trace_id not in loaded_traces:
        return jsonify({'error': 'Trace not found'}), 404

    timestamp_type = parse_timestamp_type(request.args.get('domain'))
    if timestamp_type is None:
        return jsonify({'error': 'Invalid domain. Use "elapsed" or "real".'}), 400

    _, parser = loaded_traces[trace_id]
    timestamps = parser.get_timestamps(timestamp_type)
    if timestamps is None:
        return jsonify({'error': f'Trace has no {timestamp_type.value} timestamps'}), 404

    return jsonify({
        'domain': timestamp_type.value,
        'timestamps': serialize_timestamps(timestamps)
    })


@app.route('/api/traces/<trace_id>/entries/<int:index>', methods=['GET'])
def get_entry(trace_id, index):
    """
    API endpoint returning the property tree of one entry.
    Accepts: query argument 'domain' = 'elapsed'|'real' (default: 'elapsed')
    Returns: JSON property tree
    """
    if trace_id not in loaded_traces:
        return jsonify({'error': 'Trace not found'}), 404

    timestamp_type = parse_timestamp_type(request.args.get('domain'))
    if timestamp_type is None:
        return jsonify({'error': 'Invalid domain. Use "elapsed" or "real".'}), 400

    _, parser = loaded_traces[trace_id]
    try:
        tree = parser.get_entry(index, timestamp_type)
    except (OutOfRangeError, MissingTimestampTypeError) as e:
        return jsonify({'error': str(e)}), 404
    except TraceDecodeError as e:
        logger.error("Trace %s entry %d: %s", trace_id, index, e)
        return jsonify({'error': str(e)}), 422

    return jsonify(serialize_tree(tree))


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    app.run(debug=True, host='0.0.0.0', port=5001)
