import platform
import sys

from herald.errors import HeraldError
from herald.tts import SpeechDispatcher, default_strategies

print("System:", platform.system())

text = " ".join(sys.argv[1:]) or "Hello, this is a speech test from Herald."

# Try every strategy on its own so you can see which ones work on this machine
for strategy in default_strategies():
    try:
        strategy.speak(text)
        print(f"- {strategy.name}: ok")
    except HeraldError as e:
        print(f"- {strategy.name}: FAILED ({e})")

print("Trying the full fallback chain...")
try:
    result = SpeechDispatcher().dispatch(text)
    print("Spoke with:", result.method)
except HeraldError as e:
    print("All methods failed:", e)
    sys.exit(1)
print("Done.")
