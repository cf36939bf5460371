import os
import tempfile

# Settings are read at import time, so the test environment is fixed before
# anything from jiazheng_assistant is imported.
_tmp_dir = tempfile.mkdtemp(prefix="jiazheng_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["LLM_ENABLED"] = "false"
os.environ["CHAT_STREAM_DELAY_MS"] = "0"
