"""Software renderers for the atlas and the tile grid."""
