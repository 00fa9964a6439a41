"""Lane-based commit graph layout and tile rendering"""
