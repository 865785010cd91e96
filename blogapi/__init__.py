"""Blog API: posts with uploaded images and global comments, stored in MongoDB."""
