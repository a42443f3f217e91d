"""Tests for the frame controller: scoring, power-ups, timers, game over."""

from dataclasses import replace

import pytest

from game.island import (DEFAULT_CONFIG, Bonus, BonusType, FrameController,
                         GameState, SessionState)


def aim_at_island(ball, speed_x=None):
    """Put the ball just under the island, moving up."""
    ball.x = 240.0
    ball.y = 80.0
    ball.speed_y = -abs(ball.speed_y)
    if speed_x is not None:
        ball.speed_x = speed_x


class TestRestart:

    def test_fresh_session(self, controller):
        assert controller.state is GameState.RUNNING
        assert controller.score == 0
        assert len(controller.balls) == 1
        ball = controller.balls[0]
        assert (ball.x, ball.y, ball.speed_x, ball.speed_y) == (240.0, 320.0, 2.0, -3.0)
        assert controller.paddle.width == 80.0
        assert controller.bonuses == []
        assert not controller.session.shield
        assert not controller.session.multiball

    def test_restart_resets_timers_to_now(self, controller):
        controller.step(now=5000.0)
        controller.restart()
        assert controller.session.last_shrink == 5000.0
        assert controller.session.timers[BonusType.SHIELD] == 5000.0

    def test_clock_advances_one_frame_per_step(self, controller):
        controller.step()
        controller.step()
        assert controller.now == pytest.approx(2 * controller.config.frame_ms)


class TestScoring:

    def test_three_hits_keep_speed(self, controller):
        ball = controller.balls[0]
        for _ in range(3):
            aim_at_island(ball, speed_x=2.0)
            result = controller.step()
            assert result.island_hits == 1
        assert controller.score == 3
        assert abs(ball.speed_x) == 2.0
        assert abs(ball.speed_y) == 3.0

    def test_fifth_hit_speeds_up(self, controller):
        ball = controller.balls[0]
        for _ in range(4):
            aim_at_island(ball, speed_x=2.0)
            controller.step()
        aim_at_island(ball, speed_x=2.0)
        result = controller.step()
        assert result.speedups == 1
        assert controller.score == 5
        assert ball.speed_x == pytest.approx(3.0)
        assert ball.speed_y == pytest.approx(4.5)

    def test_speedup_only_on_multiples(self, controller):
        ball = controller.balls[0]
        speedup_hits = []
        for _ in range(15):
            aim_at_island(ball)
            ball.x = 240.0
            result = controller.step()
            assert result.island_hits == 1
            if result.speedups:
                speedup_hits.append(controller.session.hits)
        assert speedup_hits == [5, 10, 15]

    def test_register_hit_modulo(self):
        session = SessionState()
        fired = [session.register_hit(5) for _ in range(15)]
        assert [i + 1 for i, f in enumerate(fired) if f] == [5, 10, 15]

    def test_speedup_applies_to_every_ball(self, controller):
        controller.apply_bonus(BonusType.MULTIBALL)
        speeds = [(b.speed_x, b.speed_y) for b in controller.balls[1:]]
        controller.session.hits = 4
        aim_at_island(controller.balls[0])
        controller.step()
        for ball, (sx, sy) in zip(controller.balls[1:], speeds):
            assert ball.speed_x == pytest.approx(sx * 1.5)
            assert ball.speed_y == pytest.approx(sy * 1.5)


class TestMultiball:

    def test_spawns_two_balls_from_paddle(self, controller):
        controller.apply_bonus(BonusType.MULTIBALL)
        assert controller.session.multiball
        assert len(controller.balls) == 3
        for ball in controller.balls[1:]:
            assert ball.x == controller.paddle.center_x
            assert ball.y == controller.paddle.y - ball.radius - 2
            assert ball.speed_y == -3.0
            assert -2.0 <= ball.speed_x <= 2.0

    def test_second_trigger_is_latched(self, controller):
        controller.apply_bonus(BonusType.MULTIBALL)
        controller.apply_bonus(BonusType.MULTIBALL)
        assert len(controller.balls) == 3

    def test_timeout_keeps_first_ball(self, controller):
        first = controller.balls[0]
        controller.apply_bonus(BonusType.MULTIBALL)
        controller.step(now=15000.0)
        assert controller.session.multiball
        assert len(controller.balls) == 3
        controller.step(now=15001.0)
        assert not controller.session.multiball
        assert controller.balls == [first]

    def test_can_retrigger_after_timeout(self, controller):
        controller.apply_bonus(BonusType.MULTIBALL)
        controller.step(now=15001.0)
        controller.apply_bonus(BonusType.MULTIBALL)
        assert len(controller.balls) == 3


class TestShield:

    def test_saves_first_of_two_falling_balls(self, controller):
        first = controller.new_ball(100.0, 650.0, 0.0, 3.0)
        second = controller.new_ball(380.0, 650.0, 0.0, 3.0)
        controller.balls = [first, second]
        controller.apply_bonus(BonusType.SHIELD)

        result = controller.step()

        assert result.shields_used == 1
        assert result.balls_lost == 1
        assert first.active
        assert not second.active
        assert not controller.session.shield
        assert controller.balls == [first]
        assert controller.state is GameState.RUNNING

    def test_saved_ball_below_field_is_lost_next_frame(self, controller):
        ball = controller.new_ball(100.0, 650.0, 0.0, 3.0)
        controller.balls = [ball]
        controller.apply_bonus(BonusType.SHIELD)
        controller.step()
        result = controller.step()
        assert result.balls_lost == 1
        assert controller.state is GameState.GAME_OVER

    def test_retrigger_resets_timer(self, controller):
        controller.apply_bonus(BonusType.SHIELD)
        controller.step(now=10000.0)
        controller.apply_bonus(BonusType.SHIELD)
        controller.step(now=20000.0)
        assert controller.session.shield
        controller.step(now=25001.0)
        assert not controller.session.shield


class TestPaddleTimer:

    def test_shrinks_after_interval(self, controller):
        controller.step(now=10000.0)
        assert controller.paddle.width == 80.0
        controller.step(now=10001.0)
        assert controller.paddle.width == 70.0
        assert controller.session.last_shrink == 10001.0

    def test_shrink_and_grow_pickups(self, controller):
        controller.apply_bonus(BonusType.SHRINK)
        assert controller.paddle.width == 70.0
        controller.apply_bonus(BonusType.GROW)
        controller.apply_bonus(BonusType.GROW)
        assert controller.paddle.width == 80.0

    def test_paddle_follows_touch_over_mouse(self, controller):
        controller.input.mouse_x = 100.0
        controller.input.touch_x = 400.0
        controller.step()
        assert controller.paddle.center_x == 400.0
        controller.input.end_touch()
        controller.step()
        assert controller.paddle.center_x == 100.0


class TestBonuses:

    def test_caught_bonus_applies_effect(self, controller):
        controller.paddle.width = 60.0
        controller.bonuses = [Bonus(kind=BonusType.GROW, x=230.0, y=590.0)]
        result = controller.step()
        assert result.collected == [BonusType.GROW]
        assert controller.paddle.width == 70.0
        assert controller.bonuses == []

    def test_unknown_bonus_does_nothing(self, controller):
        controller.bonuses = [Bonus(kind=None, x=230.0, y=590.0)]
        result = controller.step()
        assert result.collected == [None]
        assert controller.paddle.width == 80.0
        assert len(controller.balls) == 1

    def test_spawn_roll(self):
        config = replace(DEFAULT_CONFIG, bonus_spawn_chance=1.0)
        controller = FrameController(config=config, seed=1)
        result = controller.step()
        spawned = result.spawned
        assert spawned is not None
        assert spawned in controller.bonuses
        assert spawned.kind in list(BonusType)
        assert spawned.y == -config.bonus_size
        assert 0.0 <= spawned.x <= config.width - config.bonus_size

    def test_no_spawn_when_chance_is_zero(self, controller):
        for _ in range(100):
            assert controller.step().spawned is None

    def test_seeded_sessions_replay(self):
        config = replace(DEFAULT_CONFIG, bonus_spawn_chance=0.3)
        a = FrameController(config=config, seed=7)
        b = FrameController(config=config, seed=7)
        for i in range(300):
            a.input.mouse_x = b.input.mouse_x = (i * 7) % 480
            a.step()
            b.step()
        assert a.snapshot() == b.snapshot()


class TestGameOver:

    def test_last_ball_lost_ends_game(self, controller):
        controller.balls[0].x = 100.0
        controller.balls[0].y = 650.0
        controller.balls[0].speed_y = 3.0
        result = controller.step()
        assert result.game_over
        assert controller.state is GameState.GAME_OVER
        assert controller.snapshot()["game_over"]

    def test_steps_after_game_over_are_noops(self, controller):
        controller.balls[0].y = 650.0
        controller.balls[0].speed_y = 3.0
        controller.step()
        now = controller.now
        controller.bonuses = [Bonus(kind=BonusType.SHIELD, x=10.0, y=10.0)]
        controller.input.mouse_x = 0.0
        before = controller.snapshot()
        for _ in range(5):
            result = controller.step(now=now + 60000.0)
            assert result.game_over
            assert result.island_hits == 0
            assert result.spawned is None
        after = controller.snapshot()
        # only the clock moves
        assert after.pop("time_ms") == now + 60000.0
        before.pop("time_ms")
        assert after == before
        assert controller.bonuses[0].y == 10.0

    def test_restart_after_game_over(self, controller):
        controller.balls[0].y = 650.0
        controller.balls[0].speed_y = 3.0
        controller.step()
        controller.restart()
        assert controller.state is GameState.RUNNING
        assert controller.score == 0
        assert len(controller.balls) == 1


class TestSnapshot:

    def test_only_active_entities_are_drawn(self, controller):
        controller.bonuses = [Bonus(kind=BonusType.SHIELD, x=10.0, y=10.0),
                              Bonus(kind=None, x=50.0, y=10.0, active=False)]
        snap = controller.snapshot()
        assert len(snap["balls"]) == 1
        assert snap["bonuses"] == [{"x": 10.0, "y": 10.0, "size": 24.0, "kind": "shield"}]
        assert snap["paddle"]["width"] == 80.0
        assert snap["score"] == 0
