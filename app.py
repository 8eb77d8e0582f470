#!/usr/bin/env python3
"""
Flask Web Application for Build Trace Analyzer
Provides a REST API for analyzing uploaded clang -ftime-trace files.
"""

from flask import Flask, request, jsonify
from werkzeug.utils import secure_filename
import os
import tempfile
from build_trace_analyzer import BuildAnalyzer, __version__
from build_trace_analyzer.core.errors import EmptyTraceSet
from build_trace_analyzer.web import prepare_results

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024

ALLOWED_EXTENSIONS = {'json'}

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@app.route('/api/health')
def health():
    """Liveness probe."""
    return jsonify({'status': 'ok', 'version': __version__})


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze a set of trace files from one build.
    Accepts: multipart/form-data with fields:
      - 'files': one or more trace JSON files (a single 'file' is accepted too)
      - 'top_n': entries per ranked section (optional, default: 10)
    Returns: JSON with analysis results and the text report
    """
    uploads = request.files.getlist('files') or request.files.getlist('file')
    uploads = [f for f in uploads if f.filename]
    if not uploads:
        return jsonify({'error': 'No file provided'}), 400

    for upload in uploads:
        if not allowed_file(upload.filename):
            return jsonify({'error': f'Invalid file type: {upload.filename}. Only JSON files are allowed.'}), 400

    try:
        top_n = int(request.form.get('top_n', 10))
    except ValueError:
        return jsonify({'error': 'top_n must be an integer'}), 400

    with tempfile.TemporaryDirectory() as upload_dir:
        paths = []
        for i, upload in enumerate(uploads):
            # Prefix keeps identically named uploads apart
            filepath = os.path.join(upload_dir, f"{i:04d}_{secure_filename(upload.filename)}")
            upload.save(filepath)
            paths.append(filepath)

        try:
            analyzer = BuildAnalyzer(top_n=top_n)
            analyzer.analyze_files(paths)
        except EmptyTraceSet as e:
            return jsonify({'error': str(e)}), 400
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        results = prepare_results(analyzer)

    return jsonify(results)


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
