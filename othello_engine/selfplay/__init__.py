"""Engine-vs-engine games"""
