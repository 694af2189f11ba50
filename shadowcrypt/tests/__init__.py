"""shadowcrypt tests"""
