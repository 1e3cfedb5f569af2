from .gemini_analyzer import GeminiAnalyzer
