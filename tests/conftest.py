import os
import tempfile

# Settings are read once at import time; apply the API tests' environment
# defaults before any test module imports the package.
os.environ.setdefault("TOOLS_LLM_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("COUNTER_DB_PATH", os.path.join(tempfile.gettempdir(), "resume_tailor_test_counter.db"))
