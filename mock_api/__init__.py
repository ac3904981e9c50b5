# Mock Data API
