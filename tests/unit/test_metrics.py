"""Testes para as métricas de construção de chaves."""

from unittest.mock import MagicMock, patch

from cache_key_hierarchy import InMemoryKeyMetrics, KeyBuildStats, NoOpKeyMetrics, OpenTelemetryKeyMetrics


class TestKeyBuildStats:
    """Testes para KeyBuildStats."""

    def test_defaults(self) -> None:
        """Estatísticas começam zeradas."""
        stats = KeyBuildStats()

        assert stats.total_requests == 0
        assert stats.opt_out_ratio == 0.0

    def test_opt_out_ratio(self) -> None:
        """Razão de chamadas fora do cache."""
        stats = KeyBuildStats(keys_built=3, opt_outs=1)

        assert stats.total_requests == 4
        assert stats.opt_out_ratio == 0.25


class TestInMemoryKeyMetrics:
    """Testes para InMemoryKeyMetrics."""

    def test_records_counters(self) -> None:
        """Deve contar chaves, opt-outs e parâmetros suspeitos."""
        metrics = InMemoryKeyMetrics()

        metrics.record_key_built("Repo|c1|Find|Int32|$7")
        metrics.record_key_built("Repo|c1|Find|Int32|$8")
        metrics.record_opt_out("Find")
        metrics.record_suspicious_parameter("int")
        stats = metrics.get_stats()

        assert stats.keys_built == 2
        assert stats.opt_outs == 1
        assert stats.suspicious_parameters == 1
        assert stats.opt_outs_by_method == {"Find": 1}
        assert stats.suspicious_by_type == {"int": 1}

    def test_stats_are_snapshots(self) -> None:
        """Snapshot não muda com registros posteriores."""
        metrics = InMemoryKeyMetrics()
        metrics.record_opt_out("Find")

        stats = metrics.get_stats()
        metrics.record_opt_out("Find")

        assert stats.opt_outs_by_method == {"Find": 1}

    def test_reset(self) -> None:
        """Deve zerar todas as estatísticas."""
        metrics = InMemoryKeyMetrics()
        metrics.record_key_built("k")
        metrics.record_opt_out("Find")

        metrics.reset()

        assert metrics.get_stats() == KeyBuildStats()


class TestNoOpKeyMetrics:
    """Testes para NoOpKeyMetrics."""

    def test_accepts_all_records(self) -> None:
        """Não deve falhar em nenhum registro."""
        metrics = NoOpKeyMetrics()

        metrics.record_key_built("k")
        metrics.record_opt_out("Find")
        metrics.record_suspicious_parameter("int")


class TestOpenTelemetryKeyMetrics:
    """Testes para OpenTelemetryKeyMetrics."""

    def test_creates_counters_on_named_meter(self) -> None:
        """Deve criar os contadores no meter informado."""
        with patch("cache_key_hierarchy.metrics.otel_metrics") as otel:
            meter = MagicMock()
            otel.get_meter.return_value = meter

            OpenTelemetryKeyMetrics(meter_name="orders")

        otel.get_meter.assert_called_once_with("orders")
        names = [call.args[0] for call in meter.create_counter.call_args_list]
        assert names == ["cache_key.built", "cache_key.opt_outs", "cache_key.suspicious_parameters"]

    def test_records_with_attributes(self) -> None:
        """Opt-outs e suspeitos levam atributos de baixa cardinalidade."""
        with patch("cache_key_hierarchy.metrics.otel_metrics") as otel:
            meter = MagicMock()
            built, opt_outs, suspicious = MagicMock(), MagicMock(), MagicMock()
            meter.create_counter.side_effect = [built, opt_outs, suspicious]
            otel.get_meter.return_value = meter
            metrics = OpenTelemetryKeyMetrics()

        metrics.record_key_built("Repo|c1|Find|Int32|$7")
        metrics.record_opt_out("Find")
        metrics.record_suspicious_parameter("int")

        built.add.assert_called_once_with(1)
        opt_outs.add.assert_called_once_with(1, {"method": "Find"})
        suspicious.add.assert_called_once_with(1, {"parameter_type": "int"})

    def test_works_with_default_meter_provider(self) -> None:
        """Sem provider configurado, a API usa o meter no-op."""
        metrics = OpenTelemetryKeyMetrics()

        metrics.record_key_built("k")
        metrics.record_opt_out("Find")
