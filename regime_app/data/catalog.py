"""Static instrument catalog: industry ETFs, their major holdings and the benchmark."""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional

from ..errors import ConfigurationError
from .models import Instrument


DEFAULT_BENCHMARK = "SPY"


@dataclass(frozen=True)
class InstrumentCatalog:
    """Read-only instrument list plus the benchmark symbol."""
    instruments: tuple[Instrument, ...]
    benchmark: str = DEFAULT_BENCHMARK

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]],
                     benchmark: str = DEFAULT_BENCHMARK) -> "InstrumentCatalog":
        """Build a catalog from plain mappings (e.g. parsed YAML)."""
        instruments = []
        seen = set()

        for index, record in enumerate(records):
            try:
                symbol = str(record["symbol"]).strip().upper()
                name = str(record.get("name", symbol))
                category = str(record.get("category", ""))
                holdings = tuple(str(h).strip().upper() for h in record.get("holdings") or ())
            except (KeyError, TypeError, AttributeError) as e:
                raise ConfigurationError(f"Invalid instrument record at index {index}: {e}") from e

            if not symbol:
                raise ConfigurationError(f"Instrument record at index {index} has an empty symbol")
            if symbol in seen:
                raise ConfigurationError(f"Duplicate instrument symbol in catalog: {symbol}")
            seen.add(symbol)

            instruments.append(Instrument(symbol=symbol, name=name, category=category, holdings=holdings))

        if not isinstance(benchmark, str) or not benchmark.strip():
            raise ConfigurationError("Catalog benchmark must be a non-empty ticker")

        return cls(instruments=tuple(instruments), benchmark=benchmark.strip().upper())

    def get(self, symbol: str) -> Optional[Instrument]:
        for instrument in self.instruments:
            if instrument.symbol == symbol:
                return instrument
        return None

    def __iter__(self) -> Iterator[Instrument]:
        return iter(self.instruments)

    def __len__(self) -> int:
        return len(self.instruments)


# Consolidated industry groups; no holding appears under two ETFs
INDUSTRY_ETFS: tuple[Instrument, ...] = (
    Instrument('SMH', 'Semiconductors & Quantum', 'Technology', (
        'TSM', 'NVDA', 'AVGO', 'AMD', 'QCOM', 'MU', 'INTC', 'AMAT', 'ADI', 'MRVL',
        'IONQ', 'QUBT', 'QBTS', 'RGTI', 'ARQQ', 'QSI', 'QTUM')),
    Instrument('IGV', 'Enterprise Software & Security', 'Technology', (
        'MSFT', 'CRM', 'ORCL', 'ADBE', 'NOW', 'INTU', 'WDAY', 'PLTR', 'DDOG', 'TEAM',
        'GTLB', 'PANW', 'CRWD', 'FTNT', 'ZS', 'OKTA', 'CHKP', 'GEN', 'CYBR', 'S', 'RPD')),
    Instrument('SKYY', 'Cloud & Data Centers', 'Technology', (
        'AMZN', 'GOOGL', 'NET', 'SNOW', 'CFLT', 'MDB', 'ESTC', 'DBX', 'BOX', 'FIVN',
        'EQIX', 'DLR', 'CCI', 'SBAC', 'AMT', 'CONE', 'CWEN', 'QTS', 'FSLY', 'ANET')),
    Instrument('FDN', 'Internet & Fintech', 'Technology', (
        'META', 'NFLX', 'UBER', 'SHOP', 'SPOT', 'EBAY', 'PYPL', 'XYZ', 'DASH', 'ABNB',
        'COIN', 'ROKU', 'ZM', 'HOOD', 'PATH', 'RBLX', 'U', 'MARA', 'RIOT', 'AFRM', 'UPST')),
    Instrument('VGT', 'Hardware & Robotics', 'Technology', (
        'AAPL', 'CSCO', 'IBM', 'HPQ', 'DELL', 'WDC', 'STX', 'NTAP', 'PSTG', 'SMCI',
        'ARM', 'HPE', 'ISRG', 'ROK', 'EMR', 'ADSK', 'TER', 'KLAC', 'LRCX', 'ASML',
        'ABB', 'SYM', 'ZBRA', 'CGNX')),
    Instrument('ARKK', 'Innovation & EV', 'Innovation', (
        'TSLA', 'RIVN', 'LCID', 'F', 'GM', 'XPEV', 'LI', 'APTV', 'BWA')),
    Instrument('XOP', 'Oil & Gas', 'Energy', (
        'XOM', 'CVX', 'COP', 'EOG', 'PSX', 'VLO', 'MPC', 'OXY', 'WMB', 'KMI',
        'EQT', 'APA', 'DVN', 'FANG', 'MRO', 'CNX', 'OVV', 'CLR', 'CHRD', 'HES',
        'SLB', 'HAL', 'BKR', 'FTI', 'NOV', 'HP', 'PTEN', 'OII', 'WHD', 'LBRT',
        'AR', 'KNTK', 'SWN', 'RRC', 'COG', 'CTRA', 'NEXT', 'CPG', 'STNG', 'TRMD')),
    Instrument('TAN', 'Renewable Energy', 'Clean Energy', ('FSLR', 'ENPH', 'RUN')),
    Instrument('URA', 'Nuclear Energy', 'Nuclear', (
        'CCJ', 'KAP', 'NXE', 'UEC', 'UUUU', 'LEU', 'LTBR', 'SMR', 'BWXT', 'OKLO')),
    Instrument('GDX', 'Precious Metals', 'Materials', (
        'NEM', 'GOLD', 'AEM', 'WPM', 'KGC', 'FNV', 'AU', 'HMY', 'RGLD', 'IAG',
        'AG', 'PAAS', 'CDE', 'HL', 'FSM', 'EXK', 'SILV', 'SVM', 'USAS', 'MAG')),
    Instrument('LIT', 'Strategic Metals & Battery', 'Materials', (
        'ALB', 'SQM', 'LAC', 'LTHM', 'PLL', 'SGML', 'LPI', 'MP', 'PIL')),
    Instrument('SLX', 'Industrial Metals', 'Materials', (
        'NUE', 'STLD', 'CLF', 'X', 'RS', 'CMC', 'ATI', 'ZEUS', 'WOR', 'TX',
        'FCX', 'SCCO', 'VALE', 'TECK', 'FM', 'HBM', 'IVN', 'ERO', 'ARLP', 'AA',
        'APD', 'LIN', 'SHW', 'ECL', 'DD', 'DOW', 'PPG', 'CTVA', 'EMN')),
    Instrument('XBI', 'Life Sciences', 'Healthcare', (
        'MRNA', 'VRTX', 'REGN', 'ILMN', 'BMRN', 'ALNY', 'TECH', 'SRPT', 'RARE', 'JNJ',
        'PFE', 'ABBV', 'MRK', 'BMY', 'LLY', 'GILD', 'AMGN', 'BIIB', 'ZTS')),
    Instrument('IHI', 'Healthcare Services', 'Healthcare', (
        'TMO', 'ABT', 'DHR', 'MDT', 'SYK', 'BDX', 'BSX', 'EW', 'DXCM', 'ALGN',
        'UNH', 'CI', 'CVS', 'HUM', 'CNC', 'MOH', 'ELV', 'HCA', 'UHS')),
    Instrument('KRE', 'Banking', 'Financial', (
        'JPM', 'BAC', 'WFC', 'C', 'GS', 'MS', 'BLK', 'SPGI', 'MCO', 'CME',
        'USB', 'PNC', 'TFC', 'COF', 'MTB', 'FITB', 'HBAN', 'RF', 'KEY', 'CFG')),
    Instrument('KIE', 'Financial Services', 'Financial', (
        'BRK.B', 'PGR', 'TRV', 'AIG', 'MET', 'PRU', 'ALL', 'CB', 'AFL', 'L',
        'V', 'MA', 'AXP', 'FIS', 'FISV', 'ADP', 'PAYX', 'BR', 'TW', 'SOFI',
        'IBKR', 'SCHW', 'NDAQ', 'ICE', 'MKTX', 'VIRT', 'LPLA', 'RJF', 'SF')),
    Instrument('VNQ', 'Real Estate & Construction', 'Real Estate', (
        'PLD', 'PSA', 'WY', 'O', 'EXR', 'AVB', 'EQR', 'WELL', 'ARE', 'LEN',
        'NVR', 'DHI', 'PHM', 'KBH', 'TOL', 'TPG', 'BZH', 'MTH', 'GRBK', 'HD',
        'LOW', 'BLD', 'FND', 'BLDR', 'MAS', 'OC', 'VMC', 'MLM')),
    Instrument('ITA', 'Aerospace & Aviation', 'Aerospace', (
        'BA', 'RTX', 'LMT', 'NOC', 'GD', 'LHX', 'TXT', 'HWM', 'CW', 'TDG',
        'DAL', 'UAL', 'AAL', 'LUV', 'ALK', 'JBLU', 'SAVE', 'HA', 'MESA', 'SKYW')),
    Instrument('IYT', 'Transportation & Logistics', 'Transportation', (
        'UPS', 'FDX', 'UNP', 'CSX', 'NSC', 'KSU', 'CHRW', 'EXPD', 'JBHT', 'R')),
    Instrument('XRT', 'Consumer Discretionary', 'Consumer', (
        'TJX', 'TGT', 'COST', 'WMT', 'DG', 'DLTR', 'BBY', 'ROST', 'GPS', 'ANF',
        'MCD', 'SBUX', 'NKE', 'BKNG', 'CMG', 'YUM', 'DPZ', 'QSR', 'WEN', 'JACK')),
    Instrument('VDC', 'Consumer Staples', 'Consumer', (
        'PG', 'KO', 'PEP', 'MDLZ', 'CL', 'KMB', 'GIS', 'HSY', 'K', 'CPB',
        'ADM', 'BG', 'CF', 'DE', 'FMC', 'MOS', 'NTR', 'TSN', 'CAG', 'DAR')),
    Instrument('VIS', 'Industrials & Utilities', 'Industrial', (
        'HON', 'CAT', 'GE', 'MMM', 'ITW', 'ETN', 'PH', 'CMI', 'FTV', 'AME',
        'SO', 'DUK', 'AEP', 'SRE', 'D', 'PEG', 'EXC', 'XEL', 'ED', 'ES')),
    Instrument('VOX', 'Digital Media', 'Communication', (
        'GOOG', 'DIS', 'VZ', 'T', 'CMCSA', 'TMUS', 'CHTR', 'ATVI', 'EA', 'TTWO',
        'SNAP', 'TWTR', 'PINS', 'MTCH', 'IAC', 'Z', 'ZG', 'YELP', 'TRIP', 'NTES',
        'SE', 'BILI', 'WB', 'SLGG', 'MGM', 'PENN', 'DKNG', 'CHDN', 'CZR', 'RSI',
        'LVS', 'WYNN', 'BYD')),
    Instrument('EEM', 'International Markets', 'International', (
        'BABA', 'PDD', 'JD', 'BIDU', 'IBN', 'HDB', 'INFY', 'SNP', 'TME', 'VIPS',
        'TAL', 'EDU', 'YY', 'MOMO', 'ATHM')),
    Instrument('IGF', 'Infrastructure & Resources', 'Infrastructure', (
        'EPD', 'PAGP', 'OKE', 'MMP', 'PAA', 'CEQP', 'GEL', 'ENLC', 'DCP', 'WM',
        'RSG', 'WCN', 'CWST', 'CLH', 'SRCL', 'MEG', 'HASI', 'NVRI', 'PESI', 'PCH',
        'RYN', 'CUT', 'RYAM', 'UFS', 'STOR', 'TREE', 'WOOD', 'TIPT')),
)


def default_catalog() -> InstrumentCatalog:
    """Get the built-in industry catalog benchmarked against SPY."""
    return InstrumentCatalog(instruments=INDUSTRY_ETFS, benchmark=DEFAULT_BENCHMARK)
