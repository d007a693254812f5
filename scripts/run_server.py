#!/usr/bin/env python3
"""
Start the catalog sync API.

Equivalent to:
  uvicorn src.api.main:app --host 0.0.0.0 --port $PORT
"""
import sys
import argparse
import os
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn
from dotenv import load_dotenv


def main():
    load_dotenv()
    parser = argparse.ArgumentParser(description='Run the catalog sync API server')
    parser.add_argument('--host', default='0.0.0.0')
    parser.add_argument('--port', type=int, default=int(os.getenv('PORT', '3000')))
    parser.add_argument('--reload', action='store_true', help='Reload on code changes (development)')
    args = parser.parse_args()

    print(f"🚀 Starting catalog sync API on port {args.port}")
    print(f"📊 Status: http://localhost:{args.port}/api/status")
    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == '__main__':
    main()
