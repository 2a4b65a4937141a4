"""
CollisiM Test Suite

Tests organized by:
- test_particles.py: Particle value type and SoA container
- test_counter.py / test_pool.py: Shared counter and worker pool
- test_mover.py: Bounded random-walk kernel
- test_collisions.py: Same-chunk pairwise scan
- test_system.py: ParticleSystem tick phases
- test_diagnostics.py: Run tracker and statistics
- test_driver.py: Configuration, timing loop and CLI
- test_performance.py: Throughput gate
"""
